import string
import logging
import contextlib


class LogSuppress(contextlib.suppress):
    def __init__(self, *exceptions):
        if not exceptions:
            exceptions = [Exception]
        super().__init__(*exceptions)

    def __exit__(self, exc_type, exc_val, exc_tb):
        suppress = super().__exit__(exc_type, exc_val, exc_tb)
        if suppress:
            logging.exception('suppressed')
        return suppress


class base62:
    """text form of non negative ids, order of equal length strings follows the ids"""
    charset = string.digits + string.ascii_uppercase + string.ascii_lowercase
    base = 62
    mapping = {c: index for index, c in enumerate(charset)}

    @classmethod
    def encode(cls, n: int) -> str:
        if n < 0:
            raise ValueError(f'negative id {n}')
        chars = []
        while True:
            n, r = divmod(n, cls.base)
            chars.append(cls.charset[r])
            if n == 0:
                break
        return ''.join(chars[::-1])

    @classmethod
    def decode(cls, s: str) -> int:
        if not s:
            raise ValueError('empty string')
        n = 0
        for c in s:
            try:
                n = n * cls.base + cls.mapping[c]
            except KeyError:
                raise ValueError(f'invalid {cls.__name__} char {c!r} in {s!r}') from None
        return n


class base36(base62):
    charset = string.digits + string.ascii_uppercase
    base = 36
    mapping = {c: index for index, c in enumerate(charset)}
