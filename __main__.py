#!/usr/bin/env python3
#
# Copyright (C) Inco - All Rights Reserved.
#
# Unauthorized copying of this file, via any medium, is strictly prohibited. Proprietary and confidential.
#

'''Annuity CLI.'''

# Python.
import os
import csv
import sys
import json
import math
import locale
import logging
import textwrap
import functools

# Libs.
import sh2py
import tabulate

# Inco.
import annuity

# Print helper.
_PR = functools.partial(print, file=sys.stderr, flush=True)

# Options for the figures table.
_FIGURES_OPTS = {
    'headers': ['Figure', 'Value', 'Rounded'],
    'colalign': ('left', 'right', 'right'),
    'disable_numparse': True
}

# Accepted spellings of the payment timing flag.
_WHEN = {
    'end': annuity.END,
    '0': annuity.END,
    'beginning': annuity.BEGINNING,
    '1': annuity.BEGINNING
}

# Affirmative answers for boolean options.
_YES = ['y', 'yes']

# A logger for this module.
_LOG = logging.getLogger('annuity_cli')

# Rounded, locale aware, number formatting.
_ROUNDED = functools.partial(locale.format_string, '%.2f', grouping=True)

def _when(value: str) -> int:
    '''
    Converts the "when" option into a payment timing flag.

    >>> _when('end'), _when('Beginning'), _when('1')
    (0, 1, 1)
    >>> _when('middle')
    Traceback (most recent call last):
        ...
    ValueError: invalid payment timing "middle", use end, beginning, 0 or 1
    '''

    try:
        return _WHEN[value.strip().lower()]

    except KeyError:
        raise ValueError(f'invalid payment timing "{value}", use end, beginning, 0 or 1') from None

def _setup(kwargs):
    if kwargs.get('debug', '').lower() in _YES:
        logging.basicConfig(level=logging.DEBUG)

def _emit(figures, kwargs):
    '''
    Prints a list of (NAME, VALUE) figures in the requested format.

    Tables go to standard error, machine readable formats to standard output. JSON has no NaN nor infinities, so
    these are written as the strings "nan", "inf" and "-inf".
    '''

    if (fmt := kwargs.get('format', 'fancy_outline')) in tabulate.tabulate_formats:
        data = [(name, repr(value), _ROUNDED(value)) for name, value in figures]

        tabulate.PRESERVE_WHITESPACE = True  # Force Tabulate to preserve spaces (http://github.com/astanin/python-tabulate#text-formatting).

        _PR()
        _PR(tabulate.tabulate(data, tablefmt=fmt, **_FIGURES_OPTS))
        _PR()

    elif fmt == 'json':
        print(json.dumps({name: value if math.isfinite(value) else repr(value) for name, value in figures}, allow_nan=False))

    elif fmt == 'csv':
        dev = csv.writer(sys.stdout)

        dev.writerow([name for name, _ in figures])
        dev.writerow([repr(value) for _, value in figures])

    else:
        _PR(f'Error, format "{fmt}" not supported.')

        return sh2py.HALT

def usage(command=''):
    '''
    Usage: annuity COMMAND [ARGS…]

    Closed-form annuity calculator. Commands:

    - "usage", shows this help, or the help of a given command, e.g. "annuity usage pmt";
    - "pmt", periodic payment;
    - "fv", future value;
    - "ipmt", interest portion of the payment of a given period;
    - "ppmt", principal portion of the payment of a given period;
    - "split", payment, interest and principal of a given period, side by side.

    Rates are per period, as fractions: 0.01 is 1% per period. All commands accept the options below.

      • "when", payment timing. Can be end, beginning, 0 or 1. Defaults to end;

      • "format", the output format. Besides the formats supported by the Python Tabulate library, see
        "http://github.com/astanin/python-tabulate#table-format", "json" and "csv" are supported;

      • "debug=yes" activates the "DEBUG" level in the "logging" module.
    '''

    dic = globals()

    if command and command in dic and dic[command].__doc__ and command != 'usage':
        _PR(textwrap.dedent(dic[command].__doc__))

    else:
        _PR(textwrap.dedent(str(usage.__doc__)))

    return sh2py.HALT

def pmt(rate, nper, pv, fv='0', when='end', **kwargs):
    '''
    Calculates the periodic payment of a loan, or an investment.

      annuity pmt RATE NPER PV [fv=0] [when=end]

    Example, a 100,000.00 loan, for 360 months, at 1% per month.

      annuity pmt 0.01 360 100000
    '''

    _setup(kwargs)

    try:
        val = annuity.pmt(float(rate), int(nper), float(pv), float(fv), _when(when))

    except ValueError as exc:
        _PR(f'Error: {exc}.')

        return sh2py.HALT

    return _emit([('PMT', val)], kwargs)

def fv(rate, nper, pmt, pv, when='end', **kwargs):
    '''
    Calculates the future value of a series of payments.

      annuity fv RATE NPER PMT PV [when=end]

    Example, 100.00 deposits over 12 months, at 2% per month, with 400.00 upfront.

      annuity fv 0.02 12 100 400
    '''

    _setup(kwargs)

    try:
        val = annuity.fv(float(rate), int(nper), float(pmt), float(pv), _when(when))

    except ValueError as exc:
        _PR(f'Error: {exc}.')

        return sh2py.HALT

    return _emit([('FV', val)], kwargs)

def ipmt(rate, per, nper, pv, fv='0', when='end', **kwargs):
    '''
    Calculates the interest portion of the payment due at period PER.

      annuity ipmt RATE PER NPER PV [fv=0] [when=end]
    '''

    _setup(kwargs)

    try:
        val = annuity.ipmt(float(rate), int(per), int(nper), float(pv), float(fv), _when(when))

    except ValueError as exc:
        _PR(f'Error: {exc}.')

        return sh2py.HALT

    return _emit([('IPMT', val)], kwargs)

def ppmt(rate, per, nper, pv, fv='0', when='end', **kwargs):
    '''
    Calculates the principal portion of the payment due at period PER.

      annuity ppmt RATE PER NPER PV [fv=0] [when=end]
    '''

    _setup(kwargs)

    try:
        val = annuity.ppmt(float(rate), int(per), int(nper), float(pv), float(fv), _when(when))

    except ValueError as exc:
        _PR(f'Error: {exc}.')

        return sh2py.HALT

    return _emit([('PPMT', val)], kwargs)

def split(rate, per, nper, pv, fv='0', when='end', **kwargs):
    '''
    Splits the payment due at period PER into interest and principal.

      annuity split RATE PER NPER PV [fv=0] [when=end]

    Only one period is shown. Example, the 12th installment of a 100,000.00 loan, for 360 months, at 1% per month.

      annuity split 0.01 12 360 100000
    '''

    _setup(kwargs)

    try:
        args = (float(rate), int(per), int(nper), float(pv), float(fv), _when(when))

    except ValueError as exc:
        _PR(f'Error: {exc}.')

        return sh2py.HALT

    _LOG.debug(f'splitting period {args[1]} of {args[2]}')

    val = annuity.pmt(args[0], *args[2:])

    return _emit([('PMT', val), ('IPMT', annuity.ipmt(*args)), ('PPMT', annuity.ppmt(*args))], kwargs)

def _setup_locale():
    '''Sets the process locale from "ANNUITY_LOCALE", or the user's default one.'''

    name = os.environ.get('ANNUITY_LOCALE', '')

    try:
        locale.setlocale(locale.LC_ALL, name)

    except locale.Error as exc:
        _PR(f'Error: locale "{name}" is unavailable ({exc}).')

        return sh2py.HALT

cli = sh2py.CommandLineMapper()

cli.add(usage)
cli.add(pmt)
cli.add(fv)
cli.add(ipmt)
cli.add(ppmt)
cli.add(split)

if __name__ == '__main__':
    if _setup_locale() is sh2py.HALT or cli.run() is sh2py.HALT:
        exit(1)

# vi:fdm=marker:
