import dataclasses

import pytest

from glyphgrid.converter import convert
from glyphgrid.errors import ValidationError
from glyphgrid.settings import ConversionSettings, validate_settings
from tests.conftest import solid_buffer


def test_defaults_are_valid():
    settings = ConversionSettings()
    assert validate_settings(settings) == []
    assert settings.validate() is settings


def test_settings_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        ConversionSettings().size = "large"


def test_collects_every_error():
    settings = ConversionSettings(
        character_set="custom",
        custom_characters="  ",
        size="custom",
        custom_width=9,
        custom_height=501,
    )
    assert validate_settings(settings) == [
        "Custom character set cannot be empty",
        "Custom width must be between 10 and 500",
        "Custom height must be between 10 and 500",
    ]


def test_custom_bounds_inclusive():
    assert validate_settings(ConversionSettings(size="custom", custom_width=10, custom_height=500)) == []


def test_custom_size_ignored_for_presets():
    assert validate_settings(ConversionSettings(size="small", custom_width=0, custom_height=0)) == []


def test_unknown_options_reported():
    errors = validate_settings(ConversionSettings(character_set="runes", size="huge", color_mode="sepia"))
    assert len(errors) == 3


def test_validate_raises_joined_message():
    settings = ConversionSettings(size="custom", custom_width=1, custom_height=1)
    with pytest.raises(ValidationError, match="width.*; Custom height"):
        settings.validate()


def test_from_dict_uses_front_end_names():
    settings = ConversionSettings.from_dict(
        {
            "characterSet": "extended",
            "size": "custom",
            "customWidth": 80,
            "customHeight": 40,
            "colorMode": "color",
            "imageWidth": 640,
            "imageHeight": 480,
        }
    )
    assert settings == ConversionSettings(
        character_set="extended",
        size="custom",
        custom_width=80,
        custom_height=40,
        color_mode="color",
        image_width=640,
        image_height=480,
    )


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ValidationError, match="backgroundColor"):
        ConversionSettings.from_dict({"backgroundColor": "black"})


@pytest.mark.parametrize(
    "options, message",
    [
        ({"characterSet": "custom", "customCharacters": None}, "Custom characters must be a string"),
        ({"size": "custom", "customWidth": "80"}, "Custom width must be an integer"),
        ({"size": "custom", "customWidth": None}, "Custom width must be an integer"),
        ({"customHeight": True}, "Custom height must be an integer"),
        ({"size": "small", "imageWidth": "640", "imageHeight": 480}, "Image width must be an integer"),
    ],
)
def test_wrongly_typed_options_are_validation_errors(options, message):
    settings = ConversionSettings.from_dict(options)
    with pytest.raises(ValidationError, match=message):
        settings.validate()


def test_wrongly_typed_options_fail_conversion_cleanly():
    settings = ConversionSettings.from_dict({"characterSet": "custom", "customCharacters": None})
    with pytest.raises(ValidationError):
        convert(solid_buffer(20, 20), settings)
