"""Tests for round conversion, session totals, final ranks and fee shares."""

from itertools import permutations, product
from unittest.mock import patch

import pytest

from scoring.logic.engine import convert_round, fee_shares, final_ranks, session_totals, summarize_session
from scoring.logic.enums import OkaRule, TiePolicy, UmaRule
from scoring.logic.exceptions import InvalidSlotVectorError
from scoring.logic.ranking import rank_slots
from scoring.logic.rules import RuleConfig


def _rules(uma=UmaRule.WANTSU, oka=OkaRule.OKA_20, tie=TiePolicy.SPLIT) -> RuleConfig:
    return RuleConfig.from_rules(uma, oka, tie)


POOL_VECTORS = [
    (40000, 30000, 20000, 10000),
    (25000, 25000, 25000, 25000),
    (30000, 30000, 20000, 20000),
    (30000, 30000, 30000, 10000),
    (52300, 31700, 16000, 0),
    (-4000, 48000, 28000, 28000),
]


class TestConvertRound:
    def test_distinct_scores(self):
        """uma 10-20, oka 20: 1st gets diff 10 + uma 20 + oka 20."""
        result = convert_round(_rules(), (40000, 30000, 20000, 10000))
        assert result.ranks == (1, 2, 3, 4)
        assert result.points == (50, 10, -20, -40)

    def test_all_tied_split_without_oka(self):
        result = convert_round(_rules(uma=UmaRule.GOTTO, oka=OkaRule.OKA_0), (25000, 25000, 25000, 25000))
        assert result.ranks == (1, 1, 1, 1)
        assert result.points == (0, 0, 0, 0)

    def test_all_tied_seat_order(self):
        rules = _rules(uma=UmaRule.GOTTO, oka=OkaRule.OKA_0, tie=TiePolicy.SEAT)
        result = convert_round(rules, (25000, 25000, 25000, 25000))
        assert result.ranks == (1, 2, 3, 4)
        assert result.points == (10, 5, -5, -10)

    def test_split_tie_averages_uma_and_oka(self):
        # positions 1st+2nd share (40 + 10) / 2, 3rd+4th share (-10 - 20) / 2
        result = convert_round(_rules(), (30000, 30000, 20000, 20000))
        assert result.ranks == (1, 1, 3, 3)
        assert result.points == (25, 25, -25, -25)

    def test_seat_tie_assigns_strictly(self):
        result = convert_round(_rules(tie=TiePolicy.SEAT), (30000, 30000, 20000, 20000))
        assert result.ranks == (1, 2, 3, 4)
        assert result.points == (40, 10, -20, -30)

    def test_three_way_tie_gives_fractional_points(self):
        result = convert_round(_rules(), (30000, 30000, 30000, 10000))
        assert result.ranks == (1, 1, 1, 4)
        assert result.points == pytest.approx((40 / 3, 40 / 3, 40 / 3, -40))

    def test_later_seat_tied_for_top(self):
        result = convert_round(_rules(uma=UmaRule.WANSURI, oka=OkaRule.OKA_0), (20000, 35000, 35000, 10000))
        # base 25000; seats 1 and 2 share (30 + 10) / 2 = 20
        assert result.ranks == (3, 1, 1, 4)
        assert result.points == (-15, 30, 30, -45)

    def test_moving_1000_moves_one_point(self):
        rules = _rules()
        before = convert_round(rules, (40000, 30000, 20000, 10000))
        after = convert_round(rules, (41000, 29000, 20000, 10000))
        assert after.ranks == before.ranks
        assert after.points[0] - before.points[0] == pytest.approx(1)
        assert after.points[1] - before.points[1] == pytest.approx(-1)
        assert after.points[2:] == before.points[2:]

    def test_does_not_require_pool_total(self):
        result = convert_round(_rules(oka=OkaRule.OKA_0), (31500, 30000, 20000, 10000))
        assert result.points == (26.5, 15, -15, -35)

    @pytest.mark.parametrize("scores", POOL_VECTORS)
    def test_points_are_zero_sum_when_scores_total_pool(self, scores):
        for uma, oka, tie in product(UmaRule, OkaRule, TiePolicy):
            result = convert_round(_rules(uma, oka, tie), scores)
            assert sum(result.points) == pytest.approx(0, abs=1e-9)

    @pytest.mark.parametrize("scores", POOL_VECTORS)
    def test_split_group_bonus_is_mean_of_positions(self, scores):
        rules = _rules()
        bonuses = rules.position_bonuses()
        result = convert_round(rules, scores)
        for rank in set(result.ranks):
            members = [seat for seat, r in enumerate(result.ranks) if r == rank]
            positions = range(rank - 1, rank - 1 + len(members))
            expected = sum(bonuses[p] for p in positions) / len(members)
            for seat in members:
                diff = (scores[seat] - rules.base) / 1000
                assert result.points[seat] - diff == pytest.approx(expected)

    def test_rejects_wrong_length(self):
        with pytest.raises(InvalidSlotVectorError, match="scores"):
            convert_round(_rules(), (40000, 30000, 30000))

    def test_ranks_each_hand_once(self):
        with patch("scoring.logic.engine.rank_slots", wraps=rank_slots) as ranked:
            convert_round(_rules(), (30000, 30000, 20000, 20000))
        assert ranked.call_count == 1


class TestSessionTotals:
    def test_sums_each_seat(self):
        hands = [(40000, 30000, 20000, 10000), (10000, 20000, 30000, 40000)]
        assert session_totals(_rules(), hands) == (10, -10, -10, 10)

    def test_empty_session(self):
        assert session_totals(_rules(), []) == (0, 0, 0, 0)

    def test_order_independent(self):
        hands = [
            (40000, 30000, 20000, 10000),
            (30000, 30000, 30000, 10000),
            (25000, 25000, 25000, 25000),
            (-4000, 48000, 28000, 28000),
        ]
        expected = session_totals(_rules(), hands)
        for order in permutations(hands):
            assert session_totals(_rules(), order) == expected

    def test_accepts_generator(self):
        hands = ((40000, 30000, 20000, 10000) for _ in range(3))
        assert session_totals(_rules(), hands) == (150, 30, -60, -120)


class TestFinalRanks:
    def test_split_shares_best_rank(self):
        assert final_ranks((10, -10, -10, 10), TiePolicy.SPLIT) == (1, 3, 3, 1)

    def test_seat_breaks_ties(self):
        assert final_ranks((10, -10, -10, 10), TiePolicy.SEAT) == (1, 3, 4, 2)

    def test_untied(self):
        assert final_ranks((-5.5, 30.5, 0, -25), TiePolicy.SPLIT) == (3, 1, 2, 4)


class TestFeeShares:
    def test_split_tie_for_first(self):
        assert fee_shares((10, 10, 0, -20), TiePolicy.SPLIT, 3000) == (500, 500, 500, 1500)

    def test_seat_tie_for_first(self):
        assert fee_shares((10, 10, 0, -20), TiePolicy.SEAT, 3000) == (0, 1000, 500, 1500)

    def test_all_tied_split_evenly(self):
        assert fee_shares((0, 0, 0, 0), TiePolicy.SPLIT, 1000) == (250, 250, 250, 250)

    def test_last_place_pays_half(self):
        shares = fee_shares((-30, 10, 50, -30.5), TiePolicy.SPLIT, 6000)
        assert shares == (1000, 2000, 0, 3000)

    @pytest.mark.parametrize(
        "totals",
        [(10, 10, 0, -20), (5, 5, 5, -15), (0, 0, 0, 0), (1.5, -0.5, -0.5, -0.5), (40, -10, -20, -10)],
    )
    @pytest.mark.parametrize("fee", [1, 1000, 3000, 4999])
    def test_shares_add_up_to_fee(self, totals, fee):
        for policy in TiePolicy:
            assert sum(fee_shares(totals, policy, fee)) == pytest.approx(fee)


class TestSummarizeSession:
    HANDS = [(40000, 30000, 20000, 10000), (10000, 20000, 30000, 40000)]

    def test_rounds_match_convert_round(self):
        summary = summarize_session(_rules(), self.HANDS)
        assert summary.rounds == tuple(convert_round(_rules(), h) for h in self.HANDS)

    def test_totals_ranks_and_fee(self):
        summary = summarize_session(_rules(), self.HANDS, fee_amount=2000)
        assert summary.totals == (10, -10, -10, 10)
        assert summary.final_ranks == (1, 3, 3, 1)
        assert summary.fee_shares == pytest.approx((1000 / 3, 2000 / 3, 2000 / 3, 1000 / 3))

    def test_no_fee(self):
        summary = summarize_session(_rules(), self.HANDS)
        assert summary.fee_shares is None

    def test_ranks_each_hand_and_the_totals_once(self):
        with patch("scoring.logic.engine.rank_slots", wraps=rank_slots) as ranked:
            summarize_session(_rules(), self.HANDS, fee_amount=2000)
        assert ranked.call_count == len(self.HANDS) + 1

    def test_empty_session_split(self):
        summary = summarize_session(_rules(), [], fee_amount=1000)
        assert summary.rounds == ()
        assert summary.totals == (0, 0, 0, 0)
        assert summary.final_ranks == (1, 1, 1, 1)
        assert summary.fee_shares == (250, 250, 250, 250)

    def test_empty_session_seat(self):
        summary = summarize_session(_rules(tie=TiePolicy.SEAT), [])
        assert summary.final_ranks == (1, 2, 3, 4)

    def test_fractional_totals_that_tie_are_ranked_together(self):
        hands = [(30000, 30000, 30000, 10000), (10000, 30000, 30000, 30000)]
        summary = summarize_session(_rules(), hands)
        assert summary.final_ranks == (3, 1, 1, 3)
        assert summary.totals == pytest.approx((-80 / 3, 80 / 3, 80 / 3, -80 / 3))
