from __future__ import annotations


def main() -> None:
    # [START README_FX_SMILE]
    import datetime as dt

    from quant_analytics import DayCount, FxSmileVolatilities, SmileDeltaTermStructure
    from quant_analytics.diagnostics import node_sensitivity_table, surface_table

    smile = SmileDeltaTermStructure.of(
        expiries=[0.25, 0.5, 1.0, 2.0],
        deltas=[0.10, 0.25],
        atm=[0.185, 0.18, 0.17, 0.16],
        risk_reversal=[[-0.011, -0.006], [-0.012, -0.007], [-0.013, -0.008], [-0.014, -0.009]],
        strangle=[[0.031, 0.011], [0.032, 0.012], [0.033, 0.013], [0.034, 0.014]],
    )
    valuation = dt.datetime(2015, 6, 1, 12, 0)
    vols = FxSmileVolatilities(smile, valuation, DayCount.ACT_365F)

    forward = 1.40
    print("Strikes at 1y:", smile.smile_for_time(1.0).strikes(forward))

    expiries = [valuation + dt.timedelta(days=d) for d in (91, 182, 365)]
    print(surface_table(vols, expiries=expiries, strikes=[1.2, 1.3, 1.4, 1.5, 1.6], forward=forward))
    print(node_sensitivity_table(vols, expiry=expiries[1], strike=1.45, forward=forward))
    # [END README_FX_SMILE]


if __name__ == "__main__":
    main()
