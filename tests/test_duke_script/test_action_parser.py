"""Tests for single-line command parsing."""

import pytest

from src.duke_script.action_parser import DISALLOWED_COMMANDS, parse_one_line_action
from src.duke_script.action_types import (
    AnimateNewsReporter,
    CheckBoxDefinition,
    Delay,
    DisableMenuFunctionality,
    DrawBigText,
    DrawSprite,
    DrawText,
    EnableTextOffset,
    EnableTimeOutToDemo,
    FadeIn,
    FadeOut,
    SetPalette,
    SetupCheckBoxes,
    ShowFullScreenImage,
    ShowKeyBindings,
    ShowMenuSelectionIndicator,
    ShowSaveSlots,
    StopNewsReporterAnimation,
    WaitForUserInput,
)
from src.duke_script.exceptions import (
    CorruptPayloadError,
    DisallowedCommandInContextError,
    MalformedArgumentError,
)


class TestSimpleCommands:
    """Tests for commands without arguments."""

    @pytest.mark.parametrize(
        "source, expected",
        [
            ("//FADEIN", FadeIn()),
            ("//FADEOUT", FadeOut()),
            ("//BABBLEOFF", StopNewsReporterAnimation()),
            ("//NOSOUNDS", DisableMenuFunctionality()),
            ("//KEYS", ShowKeyBindings()),
            ("//WAIT", WaitForUserInput()),
            ("//SHIFTWIN", EnableTextOffset()),
            ("//EXITTODEMO", EnableTimeOutToDemo()),
        ],
    )
    def test_no_argument_commands(self, command_line, source, expected):
        """Each simple command yields its action."""
        assert parse_one_line_action(command_line(source)) == expected

    def test_pak_is_press_any_key_sprite(self, command_line):
        """PAK draws actor 146 at the origin."""
        action = parse_one_line_action(command_line("//PAK"))
        assert action == DrawSprite(x=0, y=0, actor_id=146, frame=0)


class TestDelay:
    """Tests for DELAY."""

    def test_positive_delay(self, command_line):
        assert parse_one_line_action(command_line("//DELAY 5")) == Delay(5)

    @pytest.mark.parametrize(
        "source", ["//DELAY 0", "//DELAY -3", "//DELAY", "//DELAY x", "//DELAY \u0665"]
    )
    def test_invalid_delay(self, command_line, source):
        """Zero, negative, missing or non-ASCII amounts are rejected."""
        with pytest.raises(MalformedArgumentError, match="DELAY"):
            parse_one_line_action(command_line(source))


class TestBabbleOn:
    """Tests for BABBLEON."""

    def test_babble_on(self, command_line):
        action = parse_one_line_action(command_line("//BABBLEON 30"))
        assert action == AnimateNewsReporter(30)

    def test_babble_on_requires_positive_duration(self, command_line):
        with pytest.raises(MalformedArgumentError):
            parse_one_line_action(command_line("//BABBLEON 0"))


class TestGetNames:
    """Tests for GETNAMES."""

    @pytest.mark.parametrize("slot", [0, 3, 7])
    def test_valid_slots(self, command_line, slot):
        action = parse_one_line_action(command_line(f"//GETNAMES {slot}"))
        assert action == ShowSaveSlots(slot)

    @pytest.mark.parametrize("slot", [8, -1, 100])
    def test_out_of_range(self, command_line, slot):
        with pytest.raises(MalformedArgumentError, match="GETNAMES"):
            parse_one_line_action(command_line(f"//GETNAMES {slot}"))


class TestNamedResources:
    """Tests for LOADRAW and GETPAL."""

    def test_load_raw(self, command_line):
        action = parse_one_line_action(command_line("//LOADRAW STORY1.MNI"))
        assert action == ShowFullScreenImage("STORY1.MNI")

    def test_get_pal(self, command_line):
        action = parse_one_line_action(command_line("//GETPAL  GAMEPAL.PAL  "))
        assert action == SetPalette("GAMEPAL.PAL")

    @pytest.mark.parametrize("command", ["LOADRAW", "GETPAL"])
    def test_missing_name(self, command_line, command):
        """An empty name is rejected and the message names the command."""
        with pytest.raises(MalformedArgumentError, match=command):
            parse_one_line_action(command_line(f"//{command}"))


class TestMenuCommands:
    """Tests for Z and TOGGS."""

    def test_selection_indicator(self, command_line):
        action = parse_one_line_action(command_line("//Z 42"))
        assert action == ShowMenuSelectionIndicator(42)

    def test_toggs(self, command_line):
        """TOGGS reads x, count, then count (y, id) pairs."""
        action = parse_one_line_action(command_line("//TOGGS 3 2 10 1 12 2"))
        assert action == SetupCheckBoxes(
            x_pos=3,
            definitions=(
                CheckBoxDefinition(y_pos=10, id=1),
                CheckBoxDefinition(y_pos=12, id=2),
            ),
        )

    def test_toggs_zero_count(self, command_line):
        action = parse_one_line_action(command_line("//TOGGS 3 0"))
        assert action == SetupCheckBoxes(x_pos=3, definitions=())

    def test_toggs_count_beyond_pairs(self, command_line):
        """Pairs missing from the line read as (0, 0)."""
        action = parse_one_line_action(command_line("//TOGGS 3 3 10 1"))
        assert action == SetupCheckBoxes(
            x_pos=3,
            definitions=(
                CheckBoxDefinition(y_pos=10, id=1),
                CheckBoxDefinition(y_pos=0, id=0),
                CheckBoxDefinition(y_pos=0, id=0),
            ),
        )


class TestXYText:
    """Tests for the three XYTEXT variants."""

    def test_plain_text(self, command_line):
        action = parse_one_line_action(command_line("//XYTEXT 10 20 Hello world"))
        assert action == DrawText(x=10, y=20, text="Hello world")

    def test_big_text_without_leading_spaces(self, command_line):
        """The marker's low nibble is the color index."""
        action = parse_one_line_action(command_line("//XYTEXT 1 2 \xf7Hello"))
        assert action == DrawBigText(x=1, y=2, color_index=7, text="Hello")

    def test_big_text_leading_spaces_shift_x(self, command_line):
        """Characters before the marker move the text right."""
        action = parse_one_line_action(command_line("//XYTEXT 1 2    \xfaBIG"))
        assert action == DrawBigText(x=4, y=2, color_index=10, text="BIG")

    def test_big_text_wins_over_sprite_marker(self, command_line):
        """A big text marker anywhere takes precedence."""
        action = parse_one_line_action(command_line("//XYTEXT 0 0 \xef\xf1A"))
        assert action == DrawBigText(x=1, y=0, color_index=1, text="A")

    def test_big_text_marker_is_a_single_byte(self, command_line):
        """Code points above 0xFF are plain text, not markers."""
        action = parse_one_line_action(command_line("//XYTEXT 1 2 \u20acHi"))
        assert action == DrawText(x=1, y=2, text="\u20acHi")

    def test_highest_big_text_marker(self, command_line):
        action = parse_one_line_action(command_line("//XYTEXT 1 2 \xffX"))
        assert action == DrawBigText(x=1, y=2, color_index=15, text="X")

    def test_sprite(self, command_line):
        """0xEF is followed by a 3 digit actor and a 2 digit frame."""
        action = parse_one_line_action(command_line("//XYTEXT 10 20 \xef14603"))
        assert action == DrawSprite(x=12, y=21, actor_id=146, frame=3)

    def test_sprite_ignores_trailing_bytes(self, command_line):
        action = parse_one_line_action(command_line("//XYTEXT 0 0 \xef00102xyz"))
        assert action == DrawSprite(x=2, y=1, actor_id=1, frame=2)

    def test_sprite_digits_read_up_to_first_non_digit(self, command_line):
        """Each number is its leading decimal digits, "1_2" reads as 1."""
        action = parse_one_line_action(command_line("//XYTEXT 0 0 \xef1_203"))
        assert action == DrawSprite(x=2, y=1, actor_id=1, frame=3)

    def test_sprite_digits_must_be_ascii(self, command_line):
        with pytest.raises(CorruptPayloadError):
            parse_one_line_action(command_line("//XYTEXT 0 0 \xef\u0661\u0664\u066603"))

    def test_sprite_payload_too_short(self, command_line):
        with pytest.raises(CorruptPayloadError):
            parse_one_line_action(command_line("//XYTEXT 10 20 \xef1460"))

    def test_sprite_payload_not_numeric(self, command_line):
        with pytest.raises(CorruptPayloadError):
            parse_one_line_action(command_line("//XYTEXT 10 20 \xefabcde"))

    @pytest.mark.parametrize("source", ["//XYTEXT 10 20", "//XYTEXT 10 20   ", "//XYTEXT"])
    def test_empty_payload(self, command_line, source):
        with pytest.raises(CorruptPayloadError):
            parse_one_line_action(command_line(source))


class TestDisallowedAndUnknown:
    """Tests for context-restricted and unknown commands."""

    @pytest.mark.parametrize("command", sorted(DISALLOWED_COMMANDS))
    def test_disallowed_commands(self, command_line, command):
        with pytest.raises(DisallowedCommandInContextError) as exc_info:
            parse_one_line_action(command_line(f"//{command}"))
        assert exc_info.value.command == command
        assert "not allowed in this context" in str(exc_info.value)

    def test_end_is_disallowed(self, command_line):
        """END only ever terminates a script, never reaches an action."""
        with pytest.raises(DisallowedCommandInContextError):
            parse_one_line_action(command_line("//END"))

    @pytest.mark.parametrize("source", ["//HELPTEXT 1 1 Hint", "//SETKEYS 21 49", "//ETE", "//"])
    def test_unknown_commands_are_ignored(self, command_line, source):
        assert parse_one_line_action(command_line(source)) is None

    def test_disallowed_set_is_immutable(self):
        assert isinstance(DISALLOWED_COMMANDS, frozenset)
        assert DISALLOWED_COMMANDS == {
            "APAGE",
            "CENTERWINDOW",
            "CWTEXT",
            "MENU",
            "PAGESEND",
            "PAGESSTART",
            "SKLINE",
        }
