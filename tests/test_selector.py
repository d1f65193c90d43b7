"""Tests for emoji selection."""

import itertools

import pytest

from emojify.config import EmojifyConfig
from emojify.selector import EmojiSelector, select_emoji
from emojify.types import EmojiCategory, FaceSignals

SMILE = 0.9
NO_SMILE = 0.05
OPEN = 0.9
CLOSED = 0.1


class TestSelectEmoji:
    @pytest.mark.parametrize(
        "smile,left,right,expected",
        [
            (SMILE, OPEN, OPEN, EmojiCategory.SMILE),
            (SMILE, CLOSED, OPEN, EmojiCategory.LEFT_WINK),
            (SMILE, OPEN, CLOSED, EmojiCategory.RIGHT_WINK),
            (SMILE, CLOSED, CLOSED, EmojiCategory.CLOSED_EYE_SMILE),
            (NO_SMILE, OPEN, OPEN, EmojiCategory.FROWN),
            (NO_SMILE, CLOSED, OPEN, EmojiCategory.LEFT_WINK_FROWN),
            (NO_SMILE, OPEN, CLOSED, EmojiCategory.RIGHT_WINK_FROWN),
            (NO_SMILE, CLOSED, CLOSED, EmojiCategory.CLOSED_EYE_FROWN),
        ],
    )
    def test_decision_table(self, smile, left, right, expected):
        assert select_emoji(FaceSignals(smile, left, right)) == expected

    def test_total_over_all_predicate_combinations(self):
        """Every smiling/left/right combination maps to a distinct category."""
        results = set()
        for smile, left, right in itertools.product(
            (SMILE, NO_SMILE), (OPEN, CLOSED), (OPEN, CLOSED)
        ):
            results.add(select_emoji(FaceSignals(smile, left, right)))
        assert results == set(EmojiCategory)

    def test_left_wink_over_probability_grid(self):
        for smile in (0.16, 0.5, 1.0):
            for left in (0.0, 0.25, 0.49):
                for right in (0.5, 0.75, 1.0):
                    signals = FaceSignals(smile, left, right)
                    assert select_emoji(signals) == EmojiCategory.LEFT_WINK

    def test_frown_over_probability_grid(self):
        for smile in (0.0, 0.1, 0.15):
            for left in (0.5, 1.0):
                for right in (0.5, 1.0):
                    assert select_emoji(FaceSignals(smile, left, right)) == EmojiCategory.FROWN


class TestThresholdBoundaries:
    def test_smiling_threshold_is_strict(self):
        assert select_emoji(FaceSignals(0.15, OPEN, OPEN)) == EmojiCategory.FROWN

    def test_just_above_smiling_threshold(self):
        assert select_emoji(FaceSignals(0.1501, OPEN, OPEN)) == EmojiCategory.SMILE

    def test_eye_at_threshold_is_open(self):
        assert select_emoji(FaceSignals(SMILE, 0.5, 0.5)) == EmojiCategory.SMILE

    def test_eye_just_below_threshold_is_closed(self):
        assert select_emoji(FaceSignals(SMILE, 0.4999, 0.5)) == EmojiCategory.LEFT_WINK


class TestEmojiSelector:
    def test_defaults(self):
        selector = EmojiSelector()
        assert selector.smiling_threshold == 0.15
        assert selector.eye_open_threshold == 0.5

    def test_custom_thresholds(self):
        selector = EmojiSelector(smiling_threshold=0.6, eye_open_threshold=0.2)
        # 0.5 smile is below 0.6; 0.3 eye is above 0.2
        assert selector.select(FaceSignals(0.5, 0.3, 0.3)) == EmojiCategory.FROWN
        assert selector.select(FaceSignals(0.7, 0.1, 0.3)) == EmojiCategory.LEFT_WINK

    def test_from_config(self):
        config = EmojifyConfig(smiling_threshold=0.8, eye_open_threshold=0.3)
        selector = EmojiSelector.from_config(config)
        assert selector.smiling_threshold == 0.8
        assert selector.eye_open_threshold == 0.3

    def test_select_emoji_uses_config(self):
        config = EmojifyConfig(smiling_threshold=0.95)
        assert select_emoji(FaceSignals(0.9, OPEN, OPEN), config) == EmojiCategory.FROWN

    def test_logs_choice(self, caplog):
        with caplog.at_level("DEBUG", logger="emojify.selector"):
            EmojiSelector().select(FaceSignals(SMILE, OPEN, OPEN))
        assert "SMILE" in caplog.text


class TestEmojiCategory:
    def test_eight_categories(self):
        assert len(list(EmojiCategory)) == 8
