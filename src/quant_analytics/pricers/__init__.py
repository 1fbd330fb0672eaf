from .option_pricer import PricerResult, price_with_volatilities

__all__ = ["PricerResult", "price_with_volatilities"]
