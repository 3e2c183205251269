import json

import pytest
from pydantic import ValidationError

from buildcalc.config import DEFAULT_SETTINGS, Settings


def test_defaults():
    assert DEFAULT_SETTINGS.extrapolation_limit == 1.2
    assert DEFAULT_SETTINGS.display_limit == 5
    assert DEFAULT_SETTINGS.continuous_derating == 0.8
    assert DEFAULT_SETTINGS.max_riser_in == 7.75


def test_from_env():
    s = Settings.from_env({"BUILDCALC_DISPLAY_LIMIT": "3", "BUILDCALC_EXTRAPOLATION_LIMIT": "1.1", "OTHER": "x"})
    assert s.display_limit == 3
    assert s.extrapolation_limit == pytest.approx(1.1)
    assert s.continuous_derating == 0.8


def test_from_env_blank_values_ignored():
    assert Settings.from_env({"BUILDCALC_DISPLAY_LIMIT": "  "}) == Settings()


def test_from_env_rejects_bad_values():
    with pytest.raises(ValidationError):
        Settings.from_env({"BUILDCALC_EXTRAPOLATION_LIMIT": "0.5"})


def test_from_file(tmp_path):
    p = tmp_path / "settings.json"
    p.write_text(json.dumps({"continuous_derating": 1.0}))
    assert Settings.from_file(str(p)).continuous_derating == 1.0
    with pytest.raises(FileNotFoundError):
        Settings.from_file(str(tmp_path / "missing.json"))


def test_frozen():
    with pytest.raises(ValidationError):
        DEFAULT_SETTINGS.display_limit = 10


def test_riser_bounds_must_be_ordered():
    with pytest.raises(ValidationError):
        Settings(min_riser_in=8.0)
    with pytest.raises(ValidationError):
        Settings.from_env({"BUILDCALC_MIN_RISER_IN": "8"})
    assert Settings(min_riser_in=5.0, max_riser_in=7.0).min_riser_in == 5.0
