import pytest
from loguru import logger

from roads import options
from roads.options import (
    BoolParam,
    NonNegativeReal,
    ParamEditState,
    PositiveReal,
    RealParam,
    StringParam,
    default_options,
    max_name_len,
    option_value,
)


class TestDefaults:
    def test_order_and_values(self):
        opts = default_options()
        assert [o.name for o in opts] == [
            "Width",
            "Height",
            "Line width",
            "Background color",
            "Open on save",
        ]
        assert option_value(opts, options.WIDTH_OPTION) == 1920.0
        assert option_value(opts, options.HEIGHT_OPTION) == 1080.0
        assert option_value(opts, options.STROKE_WIDTH_OPTION) == 0.3
        assert option_value(opts, options.BACKGROUND_COLOR_OPTION) == "none"
        assert option_value(opts, options.OPEN_OPTION) is True

    def test_unknown_option(self):
        with pytest.raises(KeyError):
            option_value(default_options(), "Zoom")

    def test_render_pads_names(self):
        opts = default_options()
        pad = max_name_len(opts)
        assert pad == len("Background color")
        lines = [o.render(pad) for o in opts]
        assert lines[0] == "Width: " + " " * (pad - 5) + "1920"
        assert lines[2].endswith(": 0.3")
        assert lines[4].endswith(": true")


class TestParamValues:
    def test_real_render(self):
        assert RealParam(1920.0).render() == "1920"
        assert RealParam(0.3).render() == "0.3"

    @pytest.mark.parametrize("text", ["abc", "", "inf", "nan", "0", "-1"])
    def test_positive_real_rejects(self, text):
        value = RealParam(10.0, PositiveReal)
        assert value.parse(text) is False
        assert value.value == 10.0

    def test_non_negative_accepts_zero(self):
        value = RealParam(0.3, NonNegativeReal)
        assert value.parse("0") is True
        assert value.value == 0.0
        assert value.parse("-0.1") is False

    def test_real_accepts_exponent(self):
        value = RealParam(1.0, PositiveReal)
        assert value.parse("2.5e3") is True
        assert value.value == 2500.0

    def test_string_takes_anything(self):
        value = StringParam("none")
        assert value.parse("#ff00ff") is True
        assert value.render() == "#ff00ff"

    def test_bool(self):
        value = BoolParam(True)
        assert value.parse("false") is True
        assert value.value is False
        assert value.parse("maybe") is False
        assert value.value is False

    def test_clone_is_independent(self):
        original = RealParam(5.0, PositiveReal)
        copy = original.clone()
        copy.parse("7")
        assert original.value == 5.0
        assert copy.value == 7.0
        assert type(copy) is RealParam


class TestParamEditState:
    def test_seeded_from_value(self):
        edit = ParamEditState(RealParam(1920.0, PositiveReal))
        assert edit.buffer == "1920"
        assert edit.is_valid is True

    def test_invalid_keeps_working_value(self):
        logger.info("Testing invalid buffers do not touch the value")
        edit = ParamEditState(RealParam(1920.0, PositiveReal))
        edit.set_buffer("1920x")
        assert edit.is_valid is False
        assert edit.value.value == 1920.0
        assert edit.commit() is None

        edit.set_buffer("800")
        assert edit.is_valid is True
        assert edit.commit() == RealParam(800.0)

    def test_does_not_touch_original(self):
        original = StringParam("none")
        edit = ParamEditState(original)
        edit.set_buffer("white")
        assert original.value == "none"
        assert edit.commit().value == "white"

    def test_kind_never_changes(self):
        edit = ParamEditState(BoolParam(True))
        edit.set_buffer("1.5")
        assert edit.is_valid is False
        assert isinstance(edit.value, BoolParam)
