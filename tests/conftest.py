# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

from paramgen.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "out").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def fresh_logging():
    # setup_logging() caches the logger; capsys swaps stdout per test
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_csv_text() -> str:
    return """vmName,size,location
vm01,small,westeurope
vm02,large,northeurope
vm03,medium,eastus
"""


@pytest.fixture()
def write_csv(temp_workdir: Path, sample_csv_text: str) -> Path:
    p = temp_workdir / "data" / "vms.csv"
    p.write_text(sample_csv_text, encoding="utf-8")
    return p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """output_prefix: cfg-
output_directory: ./out
delimiter: ","
encoding: utf-8
indent: 2
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "paramgen.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
