# Copyright (C) Inco - All Rights Reserved.
#
# Unauthorized copying of this file, via any medium, is strictly prohibited. Proprietary and confidential.
#
# Refs
# ====
#
#  • http://towardsdatascience.com/pytest-with-marking-mocking-and-fixtures-in-10-minutes-678d7ccd2f70
#  • http://medium.com/worldsensing-techblog/tips-and-tricks-for-unit-tests-b35af5ba79b1.
#

'''Conftest module.'''

# Python.
import sys
import pathlib
import importlib.util

# Libs.
import pytest

def pytest_configure(config):
    config.addinivalue_line('markers', 'smoke: mark test as smoke')
    config.addinivalue_line('markers', 'limitation: test reveals an intentional limitation of the API')

@pytest.fixture(scope='session')
def cli_module():
    '''The command line module, "__main__.py", loaded under another name so that it won't run.'''

    path = pathlib.Path(__file__).parent.parent / '__main__.py'
    spec = importlib.util.spec_from_file_location('annuity_cli', path)
    mod = importlib.util.module_from_spec(spec)  # pyright: ignore[reportArgumentType]

    spec.loader.exec_module(mod)  # pyright: ignore[reportOptionalMemberAccess]

    return mod

@pytest.fixture
def cli(cli_module, monkeypatch):
    '''
    The command line module, printing to whatever "sys.stderr" is when it prints.

    The module binds "sys.stderr" once, at load time. That stream is not the one "capsys" installs for each test.
    '''

    def _pr(*args, **kwargs):
        print(*args, file=sys.stderr, flush=True, **kwargs)

    monkeypatch.setattr(cli_module, '_PR', _pr)

    return cli_module
