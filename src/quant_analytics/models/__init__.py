from .black import black_forward_delta, black_greeks, black_price
from .normal import normal_greeks, normal_price

__all__ = [
    "black_price",
    "black_greeks",
    "black_forward_delta",
    "normal_price",
    "normal_greeks",
]
