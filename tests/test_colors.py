import pytest

from woodquest.colors import COLOR_NAMES, convert_color, text_to_rgb

RGB565 = (11, 5, 5, 6, 0, 5)
RGB888 = (16, 8, 8, 8, 0, 8)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("red", 0xFF0000),
        ("snow", 0xFFFAFA),
        ("gray50", 0x7F7F7F),
        ("thistle4", 0x8B7B8B),
        ("darkred", 0x8B0000),
        ("navy", 0x80),
    ],
)
def test_named_colors_match_table(name, expected):
    assert text_to_rgb(name, None) == expected


def test_lookup_is_case_insensitive():
    assert text_to_rgb("ReD", None) == text_to_rgb("red", None)
    assert text_to_rgb("GHOSTWHITE", None) == 0xF8F8FF


def test_two_word_names_are_joined():
    assert text_to_rgb("ghost", "white") == text_to_rgb("ghost white", None)
    assert text_to_rgb("Ghost", "White") == 0xF8F8FF


def test_first_entry_wins_for_repeated_names():
    assert text_to_rgb("dark", "slate") == 0x2F4F4F
    assert text_to_rgb("light", "slate") == 0x778899


def test_none_is_transparent_marker():
    assert text_to_rgb("None", None) == -1


def test_unknown_name_gives_zero():
    assert text_to_rgb("no-such-colour", None) == 0
    assert text_to_rgb("red", "unknown") == 0


@pytest.mark.parametrize("spec", ["#ff8800", "#FF8800", "#0xff8800"])
def test_hex_specs(spec):
    assert text_to_rgb(spec, None) == 0xFF8800


def test_hex_stops_at_first_non_digit():
    assert text_to_rgb("#12zz", None) == 0x12
    assert text_to_rgb("#", None) == 0


def test_hex_ignores_extra_word():
    assert text_to_rgb("#00ff00", "ignored") == 0x00FF00


def test_gray_and_grey_spellings_agree():
    for number in range(101):
        gray = text_to_rgb(f"gray{number}", None)
        grey = text_to_rgb(f"GREY{number}", None)
        assert gray == grey == COLOR_NAMES[f"gray{number}"]


def test_gray_scale_is_monotonic_and_neutral():
    values = [text_to_rgb(f"gray{n}", None) for n in range(101)]
    assert values == sorted(values)
    assert values[0] == text_to_rgb("black", None)
    assert values[-1] == text_to_rgb("white", None)
    for value in values:
        assert value & 0xFF == (value >> 8) & 0xFF == (value >> 16) & 0xFF


def test_high_depth_leaves_color_unchanged():
    assert convert_color(0x123456, 24, RGB565) == 0x123456
    assert convert_color(0xABCDEF, 32, ()) == 0xABCDEF


def test_full_width_layout_round_trips():
    for color in (0x000000, 0x123456, 0xFF8800, 0xFFFFFF):
        assert convert_color(color, 16, RGB888) == color


def test_black_maps_to_zero():
    assert convert_color(0x000000, 16, RGB565) == 0


def test_pure_channels_fill_their_fields():
    red = convert_color(0xFF0000, 16, RGB565)
    green = convert_color(0x00FF00, 16, RGB565)
    blue = convert_color(0x0000FF, 16, RGB565)
    assert red >> 11 == (1 << 5) - 1 and red & ((1 << 11) - 1) == 0
    assert (green >> 5) == (1 << 6) - 1
    assert blue == (1 << 5) - 1
    assert convert_color(0xFFFFFF, 16, RGB565) == red | green | blue


def test_bad_shift_table_raises():
    with pytest.raises(ValueError):
        convert_color(0xFFFFFF, 16, (0, 8, 8, 8))