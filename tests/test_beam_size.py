import pytest

from buildcalc.calculators import BeamSizeInputs, calculate_beam_size, validate_inputs
from buildcalc.config import Settings
from buildcalc.sizing import InvalidInput, NoAdequateSizeFound


def beam(**kw):
    data = {"span_ft": 11, "tributary_width_ft": 15}
    data.update(kw)
    return validate_inputs(BeamSizeInputs, data)


def test_design_load():
    r = calculate_beam_size(beam(beam_type="any"))
    assert r.load_psf == 50
    assert r.load_plf == 750
    assert r.species_label == "Southern Yellow Pine"


def test_any_beam_type_recommends_tightest():
    r = calculate_beam_size(beam(beam_type="any"))
    assert r.recommended.size == "2-2x10"
    assert r.recommended.utilization_percent == 94
    assert [o.size for o in r.options] == ["2-2x10", "4x10", "2-2x12", "3-2x10", "6x8"]
    assert r.total_adequate == 9
    assert r.not_applicable == ("4x6",)


def test_built_up_only():
    r = calculate_beam_size(beam(beam_type="built"))
    assert [(o.size, o.utilization_percent) for o in r.options] == [
        ("2-2x10", 94),
        ("2-2x12", 70),
        ("3-2x10", 63),
        ("3-2x12", 47),
    ]


def test_solid_is_default():
    r = calculate_beam_size(beam())
    assert r.inputs.beam_type == "solid"
    assert r.beam_type_label == "Solid Timber"
    assert r.recommended.size == "4x10"
    assert all("-" not in o.size for o in r.options)


def test_roof_load():
    r = calculate_beam_size(beam(load_type="roof", tributary_width_ft=10))
    assert r.load_plf == 350


def test_display_limit_from_settings():
    r = calculate_beam_size(beam(beam_type="any"), settings=Settings(display_limit=2))
    assert len(r.options) == 2
    assert r.total_adequate == 9


def test_no_adequate_size():
    with pytest.raises(NoAdequateSizeFound) as exc:
        calculate_beam_size(beam(tributary_width_ft=100))
    assert "engineer" in exc.value.suggestion


@pytest.mark.parametrize(
    "data, message",
    [
        ({"span_ft": "", "tributary_width_ft": 8}, "Please enter a valid span"),
        ({"span_ft": 12}, "Please enter a valid tributary width"),
        ({"span_ft": -12, "tributary_width_ft": 8}, "Please enter a valid span"),
        ({"span_ft": "twelve", "tributary_width_ft": 8}, "Please enter a valid span"),
    ],
)
def test_invalid_inputs(data, message):
    with pytest.raises(InvalidInput) as exc:
        validate_inputs(BeamSizeInputs, data)
    assert message in exc.value.messages


def test_unknown_load_type():
    with pytest.raises(InvalidInput) as exc:
        validate_inputs(BeamSizeInputs, {"span_ft": 12, "tributary_width_ft": 8, "load_type": "attic"})
    assert exc.value.messages[0].startswith("Load type:")


def test_unknown_field_rejected():
    with pytest.raises(InvalidInput):
        validate_inputs(BeamSizeInputs, {"span_ft": 12, "tributary_width_ft": 8, "color": "red"})


def test_unknown_species():
    with pytest.raises(InvalidInput):
        calculate_beam_size(beam(species="OAK"))
