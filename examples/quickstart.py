from __future__ import annotations


def main() -> None:
    # [START README_QUICKSTART]
    import datetime as dt

    from quant_analytics import (
        DayCount,
        EuropeanOptionSpec,
        ExpiryTenorVolatilities,
        InterpolatedNodalSurface,
        OptionType,
        price_with_volatilities,
    )

    surface = InterpolatedNodalSurface.of(
        [0.5, 1.0, 5.0, 0.5, 1.0, 5.0],  # expiry (years)
        [2.0, 2.0, 2.0, 10.0, 10.0, 10.0],  # tenor (years)
        [0.35, 0.34, 0.25, 0.30, 0.25, 0.20],
        name="Black Vol",
    )
    valuation = dt.datetime(2012, 1, 10, tzinfo=dt.timezone.utc)
    vols = ExpiryTenorVolatilities(surface, valuation, DayCount.ACT_ACT_ISDA)

    expiry = dt.datetime(2014, 1, 10, tzinfo=dt.timezone.utc)
    print("Vol:", vols.volatility(expiry, 6.0, 0.025, 0.027))

    spec = EuropeanOptionSpec(OptionType.CALL, strike=0.025, expiry=expiry, tenor=6.0)
    res = price_with_volatilities(spec, forward=0.027, discount_factor=0.96, vols=vols)
    print("PV:", res.pv, "vega:", res.vega)
    print("Vega buckets:", res.vega_buckets)
    # [END README_QUICKSTART]


if __name__ == "__main__":
    main()
