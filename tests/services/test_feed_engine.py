"""Tests for FeedEngine ranking, filtering and pagination."""

from datetime import timedelta
from uuid import uuid4

import pytest

from wordmaster.domain.exceptions import DomainValidationError
from wordmaster.models.database.words import DifficultyLevel, PartOfSpeech
from wordmaster.models.dto.feed import FeedQuery, FeedSort, MemoryLevelFilter
from wordmaster.services.memory.feed_engine import FeedEngine, build_feed_query


@pytest.fixture
def feed_engine(stores, config):
    return FeedEngine(stores.records, config)


@pytest.fixture
def vocabulary(user_id, word_factory, user_word_factory, now, days_ago):
    """
    Five words with distinct memory/recency profiles.

    priority: zephyr 95 (never reviewed, level 5), apple 80 (8d, 50),
    quixotic 70 (4d, 45), mellow 45 (2d, 90), banana 30 (2h, 60)
    """
    specs = [
        ("apple", PartOfSpeech.NOUN, 50.0, days_ago(8), 5),
        ("banana", PartOfSpeech.NOUN, 60.0, now - timedelta(hours=2), 4),
        ("Quixotic", PartOfSpeech.ADJECTIVE, 45.0, days_ago(4), 3),
        ("mellow", PartOfSpeech.ADJECTIVE, 90.0, days_ago(2), 2),
        ("zephyr", PartOfSpeech.NOUN, 5.0, None, 1),
    ]
    records = {}
    for text, pos, level, reviewed, added_days_ago in specs:
        word = word_factory(text, part_of_speech=pos)
        records[text] = user_word_factory(
            user_id,
            word=word,
            memory_level=level,
            last_reviewed_at=reviewed,
            created_at=days_ago(added_days_ago),
        )
    return records


def texts(response):
    return [w.word_text for w in response.words]


class TestFeedEngine:

    def test_empty_vocabulary(self, feed_engine, now):
        response = feed_engine.get_feed(uuid4(), FeedQuery(), now)

        assert response.words == []
        assert response.total_count == 0
        assert response.has_more is False
        assert response.next_offset is None
        assert response.stats.memory_breakdown.learning == 0

    def test_priority_order(self, feed_engine, vocabulary, user_id, now):
        response = feed_engine.get_feed(user_id, FeedQuery(), now)

        assert texts(response) == ["zephyr", "apple", "Quixotic", "mellow", "banana"]
        assert [w.priority_score for w in response.words] == [95.0, 80.0, 70.0, 45.0, 30.0]

    def test_priority_ties_keep_load_order(self, feed_engine, user_id, word_factory, user_word_factory, now, days_ago):
        for text, added in (("first", 3), ("second", 2), ("third", 1)):
            user_word_factory(
                user_id,
                word=word_factory(text),
                memory_level=50.0,
                last_reviewed_at=days_ago(5),
                created_at=days_ago(added),
            )

        response = feed_engine.get_feed(user_id, FeedQuery(), now)

        assert texts(response) == ["first", "second", "third"]

    @pytest.mark.parametrize("sort_by, expected", [
        (FeedSort.MEMORY, ["zephyr", "Quixotic", "apple", "banana", "mellow"]),
        (FeedSort.LENGTH, ["apple", "banana", "mellow", "zephyr", "Quixotic"]),
        (FeedSort.DATE, ["zephyr", "mellow", "Quixotic", "banana", "apple"]),
        (FeedSort.ALPHABETICAL, ["apple", "banana", "mellow", "Quixotic", "zephyr"]),
    ])
    def test_sort_options(self, feed_engine, vocabulary, user_id, now, sort_by, expected):
        response = feed_engine.get_feed(user_id, FeedQuery(sort_by=sort_by), now)
        assert texts(response) == expected

    def test_memory_level_filter(self, feed_engine, vocabulary, user_id, now):
        learning = feed_engine.get_feed(user_id, FeedQuery(memory_level=MemoryLevelFilter.LEARNING), now)
        reviewing = feed_engine.get_feed(user_id, FeedQuery(memory_level=MemoryLevelFilter.REVIEWING), now)
        well_known = feed_engine.get_feed(user_id, FeedQuery(memory_level=MemoryLevelFilter.WELL_KNOWN), now)
        everything = feed_engine.get_feed(user_id, FeedQuery(memory_level=MemoryLevelFilter.ALL), now)

        assert texts(learning) == ["zephyr"]
        assert texts(reviewing) == ["apple", "Quixotic", "banana"]
        assert texts(well_known) == ["mellow"]
        assert everything.total_count == 5

    def test_filters_compose(self, feed_engine, vocabulary, user_id, now):
        query = FeedQuery(
            memory_level=MemoryLevelFilter.REVIEWING,
            part_of_speech=PartOfSpeech.NOUN,
            difficulty=DifficultyLevel.MEDIUM,
        )

        response = feed_engine.get_feed(user_id, query, now)

        assert texts(response) == ["apple", "banana"]
        assert all(w.part_of_speech == PartOfSpeech.NOUN for w in response.words)

    def test_stats_cover_filtered_set_not_page(self, feed_engine, vocabulary, user_id, now):
        response = feed_engine.get_feed(user_id, FeedQuery(limit=2), now)

        assert len(response.words) == 2
        assert response.stats.memory_breakdown.learning == 1
        assert response.stats.memory_breakdown.reviewing == 3
        assert response.stats.memory_breakdown.well_known == 1
        assert response.stats.difficulty_breakdown.medium == 4
        assert response.stats.difficulty_breakdown.hard == 1

    def test_pagination(self, feed_engine, vocabulary, user_id, now):
        first = feed_engine.get_feed(user_id, FeedQuery(limit=2, offset=0), now)
        second = feed_engine.get_feed(user_id, FeedQuery(limit=2, offset=2), now)
        last = feed_engine.get_feed(user_id, FeedQuery(limit=2, offset=4), now)

        assert (first.has_more, first.next_offset) == (True, 2)
        assert (second.has_more, second.next_offset) == (True, 4)
        assert (last.has_more, last.next_offset) == (False, None)
        assert texts(first) + texts(second) + texts(last) == [
            "zephyr", "apple", "Quixotic", "mellow", "banana"
        ]
        assert {r.total_count for r in (first, second, last)} == {5}

    def test_offset_past_end(self, feed_engine, vocabulary, user_id, now):
        response = feed_engine.get_feed(user_id, FeedQuery(offset=50), now)

        assert response.words == []
        assert response.total_count == 5
        assert response.has_more is False

    def test_limit_and_offset_clamped(self, feed_engine, vocabulary, user_id, now):
        too_small = feed_engine.get_feed(user_id, FeedQuery(limit=0, offset=-3), now)
        too_large = feed_engine.get_feed(user_id, FeedQuery(limit=1000), now)

        assert len(too_small.words) == 1
        assert too_small.next_offset == 1
        assert len(too_large.words) == 5

    def test_archived_words_excluded(self, feed_engine, user_id, user_word_factory, now):
        user_word_factory(user_id, memory_level=10.0, is_archived=True)
        visible = user_word_factory(user_id, memory_level=10.0)

        response = feed_engine.get_feed(user_id, FeedQuery(), now)

        assert [w.user_word_id for w in response.words] == [visible.id]

    def test_other_users_words_excluded(self, feed_engine, vocabulary, user_word_factory, now):
        stranger = uuid4()
        user_word_factory(stranger, memory_level=10.0)

        response = feed_engine.get_feed(stranger, FeedQuery(), now)

        assert response.total_count == 1

    def test_feed_word_fields(self, feed_engine, vocabulary, user_id, now):
        response = feed_engine.get_feed(user_id, FeedQuery(limit=1), now)
        word = response.words[0]

        assert word.word_text == "zephyr"
        assert word.memory_classification == "critical"
        assert word.difficulty_level == DifficultyLevel.MEDIUM
        assert word.definition == "definition of zephyr"
        assert word.user_word_id == vocabulary["zephyr"].id


class TestBuildFeedQuery:

    def test_defaults_for_missing_params(self):
        query = build_feed_query(limit=None, memory_level=None, sort_by=None)

        assert query.limit == 50
        assert query.sort_by == FeedSort.PRIORITY
        assert query.memory_level is None

    def test_parses_values(self):
        query = build_feed_query(memory_level="well_known", sort_by="alphabetical", difficulty="hard")

        assert query.memory_level == MemoryLevelFilter.WELL_KNOWN
        assert query.sort_by == FeedSort.ALPHABETICAL
        assert query.difficulty == DifficultyLevel.HARD

    @pytest.mark.parametrize("params", [
        {"memory_level": "expert"},
        {"sort_by": "random"},
        {"difficulty": "impossible"},
        {"part_of_speech": "pronoun"},
    ])
    def test_unknown_values_rejected(self, params):
        with pytest.raises(DomainValidationError):
            build_feed_query(**params)
