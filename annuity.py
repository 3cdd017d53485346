# Copyright (C) Inco - All Rights Reserved.
#
# Unauthorized copying of this file, via any medium, is strictly prohibited. Proprietary and confidential.
#
# [ANNUITY]
#
# Closed-form annuity formulas, the same ones found in spreadsheets: PMT, FV, IPMT and PPMT. The payment routines of
# the financial core iterate over a schedule. This module does not. It answers single questions, like "what is the
# payment of this loan?" or "how much of the 17th installment is interest?", in constant time.
#
# [SIGN CONVENTION]
#
# Cash flows have signs. Money received is positive, money paid is negative. A loan of 100,000.00 has a positive
# present value, so its payments, and their interest and principal portions, come out negative.
#
# [IEEE 754]
#
# All values are doubles. Python raises "ZeroDivisionError" on "x / 0.0" and "OverflowError" on a power that does not
# fit in a double, where C, Excel and .NET yield NaN or an infinity. These formulas must keep the latter behavior,
# because callers compare results against spreadsheets. For example, "pmt(0, …)" is NaN (0 / 0), not an exception.
# Every division goes through "_div", and every power through "_growth".
#
# [ZERO RATE]
#
# A zero rate is degenerate for PMT and FV, and the result is NaN. The limiting formulas are well known, e.g.
# "-(pv + fv) / n" for PMT, but they are deliberately not used. Results must stay identical to the reference
# formulas, including their degeneracies.
#
# [WEAKNESSES]
#
#   • IPMT in "beginning of period" mode charges interest on the first period, "-pv × rate / (1 + rate)". Excel
#     returns zero in that case, since the first payment happens at the very start. Kept for compatibility.
#
#   • "ppmt == pmt - ipmt" is bit exact. The beginning/end relation for IPMT is not. The
#     beginning mode payment is divided by "1 + rate" in PMT, then multiplied by it again in FV, and this round trip
#     loses the last bits.
#

'''
Annuity formulas.

Four pure functions over doubles:

  • "pmt", the periodic payment of an annuity;

  • "fv", the future value of an annuity;

  • "ipmt", the interest portion of the payment of a given period;

  • "ppmt", the principal portion of the payment of a given period.

The last two are built from the first two. There is no state, so any function can be called from any thread.

>>> pmt(0.01, 360, 100000)
-1028.6125969255042
>>> fv(0.02, 12, 100, 400)
-1848.5056906377456
>>> ipmt(0.01, 1, 360, 100000, 30000)
-1000.0
'''

# Python.
import math
import logging
import importlib.metadata

# Libs.
import typeguard

# Annuity version (http://versioningit.readthedocs.io/en/stable/runtime-version.html).
__version__ = importlib.metadata.version('annuity') if 'annuity' in importlib.metadata.packages_distributions() else 'DEV'

# Logger object.
_LOG = logging.getLogger('annuity')

# Payments at the end of each period (ordinary annuity).
END = 0

# Payments at the beginning of each period (annuity due).
BEGINNING = 1

# Helpers. {{{
def _div(a: float, b: float) -> float:
    '''
    Divides A by B, following IEEE 754 when B is zero.

    >>> _div(1, 4)
    0.25

    A zero divided by zero is NaN. Anything else divided by zero is an infinity, signed after both operands.

    >>> _div(0.0, 0.0)
    nan
    >>> _div(5.0, 0.0)
    inf
    >>> _div(5.0, -0.0)
    -inf
    >>> _div(-5.0, 0.0)
    -inf
    '''

    try:
        return a / b

    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan

        return math.copysign(math.inf, a) * math.copysign(1.0, b)

def _growth(rate: float, number_of_periods: int) -> float:
    '''
    Returns the compound growth factor, "(1 + rate) ^ number_of_periods", as a double.

    >>> _growth(0.1, 2)
    1.2100000000000002
    >>> _growth(0.05, 0)
    1.0

    Follows IEEE 754 when the power is not representable.

    >>> _growth(-1, -1)
    inf
    >>> _growth(1, 5000)
    inf
    >>> _growth(-3, 5001)
    -inf
    '''

    base = 1.0 + rate

    try:
        return base ** number_of_periods

    except ZeroDivisionError:  # Zero raised to a negative power.
        return math.inf

    except OverflowError:
        return -math.inf if base < 0 and number_of_periods % 2 else math.inf
# }}}

# Public API. {{{
@typeguard.typechecked
def pmt(rate: float, number_of_periods: int, present_value: float, future_value: float = 0, end_or_beginning: int = END) -> float:
    '''
    Calculates the periodic payment of an annuity.

    The payment is constant, and amortizes the present value, "present_value", down to the future value,
    "future_value", over "number_of_periods" periods at "rate" per period.

    >>> pmt(0.01, 360, 100000)
    -1028.6125969255042

    Use "end_or_beginning=1" when payments are due at the beginning of each period. The payment is then discounted
    by one period.

    >>> pmt(0.01, 360, 100000, 0, 1) == pmt(0.01, 360, 100000) / (1 + 0.01)
    True

    A zero rate is degenerate.

    >>> pmt(0, 12, 1000)
    nan
    '''

    growth = _growth(rate, number_of_periods)
    result = _div(rate, growth - 1) * -(present_value * growth + future_value)

    _LOG.debug(f'PMT: rate={rate}, n={number_of_periods}, growth={growth}, pmt={result}')

    if end_or_beginning == BEGINNING:
        result = _div(result, 1 + rate)

    return result

@typeguard.typechecked
def fv(rate: float, number_of_periods: int, payment_amount: float, present_value: float, end_or_beginning: int = END) -> float:
    '''
    Calculates the future value of an annuity.

    The result is the value accumulated after "number_of_periods" fixed payments of "payment_amount", plus the
    compounded present value.

    >>> fv(0.02, 12, 100, 400)
    -1848.5056906377456

    Zero periods leave the present value untouched, with its sign flipped.

    >>> fv(0.02, 0, 100, 400)
    -400.0
    '''

    if end_or_beginning == BEGINNING:
        payment_amount = payment_amount * (1 + rate)

    growth = _growth(rate, number_of_periods)

    _LOG.debug(f'FV: rate={rate}, n={number_of_periods}, growth={growth}')

    return -(_div(growth - 1, rate) * payment_amount + present_value * growth)

@typeguard.typechecked
def ipmt(rate: float, period: int, number_of_periods: int, present_value: float, future_value: float = 0, end_or_beginning: int = END) -> float:
    '''
    Calculates the interest portion of the payment due at "period".

    Periods are 1-indexed. The interest is charged over the balance at the beginning of the period, which is the
    future value of the first "period - 1" payments.

    >>> ipmt(0.01, 1, 360, 100000, 30000)
    -1000.0

    The period is not validated. Out of range periods yield whatever the formula yields.
    '''

    balance = fv(rate, period - 1, pmt(rate, number_of_periods, present_value, future_value, end_or_beginning), present_value, end_or_beginning)
    result = balance * rate

    _LOG.debug(f'IPMT: period={period}, balance={balance}, ipmt={result}')

    if end_or_beginning == BEGINNING:
        result = _div(result, 1 + rate)

    return result

@typeguard.typechecked
def ppmt(rate: float, period: int, number_of_periods: int, present_value: float, future_value: float = 0, end_or_beginning: int = END) -> float:
    '''
    Calculates the principal portion of the payment due at "period".

    It is the payment minus its interest portion, bit for bit.

    >>> round(ppmt(0.01, 1, 360, 100000), 10)
    -28.6125969255
    '''

    return pmt(rate, number_of_periods, present_value, future_value, end_or_beginning) - ipmt(rate, period, number_of_periods, present_value, future_value, end_or_beginning)

# Spreadsheet style aliases.
PMT = pmt
FV = fv
IPMT = ipmt
PPMT = ppmt
# }}}

# Log current version info.
_LOG.info(f'Annuity version {__version__} initialized')

if __name__ == '__main__':
    import doctest

    doctest.testmod()

# vi:fdm=marker:
