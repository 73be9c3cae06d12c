"""Project metadata in pyproject.toml."""

from pathlib import Path

import pytest
from aura_reader import __version__

tomllib = pytest.importorskip('tomllib')

PYPROJECT = Path(__file__).resolve().parent.parent / 'pyproject.toml'


@pytest.fixture
def project() -> dict:
    with open(PYPROJECT, 'rb') as f:
        return tomllib.load(f)['project']


class TestProjectMetadata:
    def test_version_matches_package(self, project):
        assert project['version'] == __version__

    def test_design_ledger_is_not_the_long_description(self, project):
        assert project.get('readme') != 'DESIGN.md'

    def test_script_entry_point(self, project):
        assert project['scripts']['aura-tool'] == 'aura_reader.__main__:main'
