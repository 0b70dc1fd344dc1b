"""Tests for the three trace generators: step shapes, outcomes and counters."""

import pytest

from matchtrace.errors import UnsupportedAlgorithmError
from matchtrace.generators import (
    KMPTraceGenerator,
    NaiveTraceGenerator,
    RabinKarpTraceGenerator,
    get_generator,
)
from matchtrace.trace_types import (
    Algorithm,
    ComparisonRecord,
    HashState,
    PrefixShift,
    StepOutcome,
    Trace,
)


def _outcomes(trace: Trace) -> list[StepOutcome]:
    return [s.outcome for s in trace.steps]


class TestGetGenerator:
    def test_returns_generator_for_each_algorithm(self):
        assert isinstance(get_generator(Algorithm.NAIVE), NaiveTraceGenerator)
        assert isinstance(get_generator("kmp"), KMPTraceGenerator)
        assert isinstance(get_generator("rabin-karp"), RabinKarpTraceGenerator)

    def test_unknown_tag_raises(self):
        with pytest.raises(UnsupportedAlgorithmError):
            get_generator("boyer-moore")


class TestNaiveGenerator:
    def test_one_step_per_offset(self):
        trace = NaiveTraceGenerator().generate("ABABDABACDABABCABAB", "ABABCABAB")
        assert len(trace.steps) == 19 - 9 + 1
        assert [s.anchor_text_index for s in trace.steps] == list(range(11))

    def test_partial_match_records_every_attempted_comparison(self):
        trace = NaiveTraceGenerator().generate("ABC", "ABD")
        step = trace.steps[0]
        assert step.comparisons == (
            ComparisonRecord(text_index=0, pattern_index=0, matched=True),
            ComparisonRecord(text_index=1, pattern_index=1, matched=True),
            ComparisonRecord(text_index=2, pattern_index=2, matched=False),
        )
        assert step.outcome == StepOutcome.MISMATCH
        assert step.description == "Mismatch at position 2, shifting pattern."

    def test_full_match_step(self):
        trace = NaiveTraceGenerator().generate("XAB", "AB")
        assert _outcomes(trace) == [StepOutcome.MISMATCH, StepOutcome.MATCH_FOUND]
        assert trace.steps[1].description == "Match found at position 1!"
        assert len(trace.steps[1].comparisons) == 2
        assert trace.match_positions == (1,)

    def test_overlapping_matches(self):
        trace = NaiveTraceGenerator().generate("AAAAA", "AA")
        assert trace.match_positions == (0, 1, 2, 3)
        assert trace.total_comparisons == 8

    def test_no_algorithm_detail(self):
        trace = NaiveTraceGenerator().generate("ABAB", "AB")
        assert all(s.detail is None for s in trace.steps)

    def test_no_prefix_table(self):
        trace = NaiveTraceGenerator().generate("ABAB", "AB")
        assert trace.prefix_table == ()


class TestKMPGenerator:
    def test_step_sequence_with_prefix_shift(self):
        trace = KMPTraceGenerator().generate("AABA", "AB")

        assert _outcomes(trace) == [
            StepOutcome.CHARACTER_MATCH,
            StepOutcome.MISMATCH_WITH_PREFIX_SHIFT,
            StepOutcome.CHARACTER_MATCH,
            StepOutcome.MATCH_FOUND,
            StepOutcome.CHARACTER_MATCH,
        ]
        assert trace.match_positions == (1,)
        assert trace.total_comparisons == 5

    def test_prefix_shift_detail(self):
        trace = KMPTraceGenerator().generate("AABA", "AB")
        shift_step = trace.steps[1]
        assert shift_step.detail == PrefixShift(old_offset=1, new_offset=0)
        assert shift_step.comparisons == (
            ComparisonRecord(text_index=1, pattern_index=1, matched=False),
        )
        assert shift_step.anchor_text_index == 1
        assert shift_step.description == "Mismatch, using prefix table to shift pattern."

    def test_mismatch_at_pattern_start_advances_text(self):
        trace = KMPTraceGenerator().generate("XA", "A")
        assert _outcomes(trace) == [
            StepOutcome.MISMATCH_AT_PATTERN_START,
            StepOutcome.MATCH_FOUND,
        ]
        assert trace.steps[0].anchor_text_index == 0
        assert trace.steps[1].anchor_text_index == 1
        assert trace.steps[1].comparisons[0].text_index == 1

    def test_match_step_anchor_is_match_start(self):
        trace = KMPTraceGenerator().generate("ABABDABACDABABCABAB", "ABABCABAB")
        match_steps = [s for s in trace.steps if s.outcome == StepOutcome.MATCH_FOUND]
        assert len(match_steps) == 1
        assert match_steps[0].anchor_text_index == 10
        assert match_steps[0].description == "Match found at position 10!"

    def test_exactly_one_comparison_per_step(self):
        trace = KMPTraceGenerator().generate("ABABDABACDABABCABAB", "ABABCABAB")
        assert all(len(s.comparisons) == 1 for s in trace.steps)

    def test_comparisons_bounded_by_twice_text_length(self):
        text = "AAAAAAAAAAAAAAAAAAAB"
        trace = KMPTraceGenerator().generate(text, "AAAAB")
        assert trace.total_comparisons <= 2 * len(text)

    def test_trace_carries_prefix_table(self):
        trace = KMPTraceGenerator().generate("ABABDABACDABABCABAB", "ABABCABAB")
        assert trace.prefix_table == (0, 0, 1, 2, 0, 1, 2, 3, 4)

    def test_overlapping_matches(self):
        trace = KMPTraceGenerator().generate("AAAAA", "AA")
        assert trace.match_positions == (0, 1, 2, 3)
        assert len(trace.steps) == 5


class TestRabinKarpGenerator:
    def test_spurious_hit_is_tagged_and_not_a_match(self):
        # "C;" and "AB" collide modulo 101
        trace = RabinKarpTraceGenerator().generate("C;AB", "AB")

        assert _outcomes(trace) == [
            StepOutcome.HASH_MATCH_SPURIOUS,
            StepOutcome.HASH_MISMATCH_SKIPPED,
            StepOutcome.HASH_MATCH_CONFIRMED,
        ]
        assert 0 not in trace.match_positions
        assert trace.match_positions == (2,)

    def test_spurious_step_detail(self):
        trace = RabinKarpTraceGenerator().generate("C;AB", "AB")
        spurious = trace.steps[0]
        assert spurious.detail == HashState(
            pattern_hash=41, window_hash=41, hashes_equal=True, spurious=True
        )
        assert spurious.comparisons == (
            ComparisonRecord(text_index=0, pattern_index=0, matched=False),
        )
        assert spurious.description == (
            "Hash match but actual string mismatch (spurious hit)."
        )

    def test_hash_mismatch_has_no_symbol_comparisons(self):
        trace = RabinKarpTraceGenerator().generate("C;AB", "AB")
        skipped = trace.steps[1]
        assert skipped.comparisons == ()
        assert skipped.detail == HashState(
            pattern_hash=41, window_hash=19, hashes_equal=False
        )

    def test_hash_test_counts_as_one_comparison(self):
        trace = RabinKarpTraceGenerator().generate("C;AB", "AB")
        assert [s.total_comparisons for s in trace.steps] == [2, 3, 6]
        assert [h.step_comparisons for h in trace.comparison_history] == [2, 1, 3]

    def test_every_step_has_hash_state(self):
        trace = RabinKarpTraceGenerator().generate("ABABDABACDABABCABAB", "ABABCABAB")
        assert all(isinstance(s.detail, HashState) for s in trace.steps)
        pattern_hashes = {s.detail.pattern_hash for s in trace.steps}
        assert len(pattern_hashes) == 1

    def test_confirmed_match_description(self):
        trace = RabinKarpTraceGenerator().generate("XAB", "AB")
        assert trace.steps[-1].description == "Hash match! Confirmed match at position 1."

    def test_integer_symbols(self):
        trace = RabinKarpTraceGenerator().generate([1, 2, 3, 1, 2], [1, 2])
        assert trace.match_positions == (0, 3)
        assert trace.text == (1, 2, 3, 1, 2)


class TestComparisonHistory:
    def test_history_has_one_entry_per_step(self):
        trace = NaiveTraceGenerator().generate("ABABAB", "ABA")
        assert [h.step_index for h in trace.comparison_history] == [0, 1, 2, 3]

    def test_cumulative_matches_step_totals(self):
        trace = KMPTraceGenerator().generate("ABABDABACDABABCABAB", "ABABCABAB")
        assert [h.cumulative_comparisons for h in trace.comparison_history] == [
            s.total_comparisons for s in trace.steps
        ]

    def test_step_comparisons_sum_to_total(self):
        trace = NaiveTraceGenerator().generate("ABABDABACDABABCABAB", "ABABCABAB")
        assert (
            sum(h.step_comparisons for h in trace.comparison_history)
            == trace.total_comparisons
        )


class TestCountComparisons:
    def test_naive_count_without_trace(self):
        assert NaiveTraceGenerator().count_comparisons("AAAAA", "AA") == 8

    def test_rabin_karp_count_without_trace(self):
        assert RabinKarpTraceGenerator().count_comparisons("C;AB", "AB") == 6

    def test_pattern_longer_than_text_counts_zero(self):
        assert KMPTraceGenerator().count_comparisons("AB", "ABC") == 0


class TestPatternLongerThanText:
    @pytest.mark.parametrize(
        "generator_cls",
        [NaiveTraceGenerator, KMPTraceGenerator, RabinKarpTraceGenerator],
    )
    def test_no_steps_even_when_text_is_a_prefix(self, generator_cls):
        trace = generator_cls().generate("AB", "ABC")
        assert trace.steps == ()
        assert trace.total_comparisons == 0

    def test_kmp_iter_steps_yields_nothing(self):
        generator = KMPTraceGenerator()
        table = generator.prefix_table("ABC")
        assert list(generator.iter_steps("AB", "ABC", table)) == []


class TestWordTokens:
    @pytest.mark.parametrize(
        "generator_cls",
        [NaiveTraceGenerator, KMPTraceGenerator, RabinKarpTraceGenerator],
    )
    def test_multi_character_tokens_are_symbols(self, generator_cls):
        trace = generator_cls().generate(["the", "cat", "the", "cat"], ["the", "cat"])
        assert trace.match_positions == (0, 2)
        assert trace.text == ("the", "cat", "the", "cat")
