from .conv import parse_us_date, to_dec, to_dec_strict

__all__ = ["parse_us_date", "to_dec", "to_dec_strict"]
