from src.pm_clearing.domain.pricing import (
    HALF_BPS,
    calc_shares_out,
    quote_trade,
    spot_price_bps,
)


class TestCalcSharesOut:
    def test_reference_trade(self) -> None:
        # k = 1_000_000, new_y = 1098, new_n = 1_000_000 // 1098 = 910
        assert calc_shares_out(1000, 1000, True, 98) == 90

    def test_no_side_is_mirror_of_yes(self) -> None:
        assert calc_shares_out(1000, 1000, False, 98) == 90
        assert calc_shares_out(700, 1300, True, 50) == calc_shares_out(1300, 700, False, 50)

    def test_bootstrap_one_to_one_when_reserve_empty(self) -> None:
        assert calc_shares_out(0, 0, True, 123) == 123
        assert calc_shares_out(0, 0, False, 5) == 5

    def test_floor_division_never_grows_k(self) -> None:
        y, n = 1234, 987
        for net_in in (1, 7, 99, 500, 10_000):
            out = calc_shares_out(y, n, True, net_in)
            assert (y + net_in) * (n - out) <= y * n


class TestQuoteTrade:
    def test_reference_scenario(self) -> None:
        q = quote_trade(1000, 1000, True, 100, 200)
        assert q.fee == 2
        assert q.net_in == 98
        assert q.shares_out == 90
        assert q.new_yes_reserve == 1098
        assert q.new_no_reserve == 910

    def test_no_buy_moves_reserves_the_other_way(self) -> None:
        q = quote_trade(1000, 1000, False, 100, 200)
        assert q.new_no_reserve == 1098
        assert q.new_yes_reserve == 910

    def test_zero_fee_rate(self) -> None:
        q = quote_trade(1000, 1000, True, 100, 0)
        assert q.fee == 0
        # new_n = 1_000_000 // 1100 = 909
        assert q.shares_out == 91

    def test_fee_floor_on_small_amounts(self) -> None:
        # 49 * 200 / 10000 = 0.98 -> 0
        q = quote_trade(1000, 1000, True, 49, 200)
        assert q.fee == 0
        assert q.net_in == 49

    def test_bootstrap_leaves_empty_reserve_untouched(self) -> None:
        q = quote_trade(0, 0, True, 100, 200)
        assert q.shares_out == 98
        assert q.new_yes_reserve == 98
        assert q.new_no_reserve == 0


class TestSpotPrice:
    def test_balanced_pool_is_half(self) -> None:
        assert spot_price_bps(1000, 1000, True) == 5000
        assert spot_price_bps(1000, 1000, False) == 5000

    def test_empty_pool_is_half(self) -> None:
        assert spot_price_bps(0, 0, True) == HALF_BPS
        assert spot_price_bps(0, 500, False) == HALF_BPS

    def test_prices_sum_to_one_within_a_unit(self) -> None:
        for y, n in ((1098, 910), (1, 999_999), (333, 667), (12345, 54321)):
            total = spot_price_bps(y, n, True) + spot_price_bps(y, n, False)
            assert 9999 <= total <= 10000

    def test_buying_yes_lowers_yes_price_and_raises_no_price(self) -> None:
        before_yes = spot_price_bps(1000, 1000, True)
        before_no = spot_price_bps(1000, 1000, False)
        q = quote_trade(1000, 1000, True, 100, 200)
        assert spot_price_bps(q.new_yes_reserve, q.new_no_reserve, True) < before_yes
        assert spot_price_bps(q.new_yes_reserve, q.new_no_reserve, False) > before_no

    def test_reference_post_trade_prices(self) -> None:
        # 910 * 10000 // 2008 = 4531, 1098 * 10000 // 2008 = 5468
        assert spot_price_bps(1098, 910, True) == 4531
        assert spot_price_bps(1098, 910, False) == 5468
