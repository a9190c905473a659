"""Tests for the sanitizer module — pure function tests, no filesystem access."""

from __future__ import annotations

import re
from datetime import datetime

from filename_sanitizer.sanitizer import (
    SanitizeConfig,
    add_timestamp_prefix,
    format_timestamp,
    has_timestamp_prefix,
    is_name_clean,
    normalize_unicode,
    remove_invalid_chars,
    replace_separators,
    sanitize_name,
    split_extension,
    to_title_case,
)

TS = "20240115_093000"

# ---------------------------------------------------------------------------
# normalize_unicode
# ---------------------------------------------------------------------------


class TestNormalizeUnicode:
    def test_acute_accent(self) -> None:
        assert normalize_unicode("café") == "cafe"

    def test_decomposed_input(self) -> None:
        assert normalize_unicode("cafe\u0301") == "cafe"

    def test_multiple_diacritics(self) -> None:
        assert normalize_unicode("Ångström naïve") == "Angstrom naive"

    def test_fullwidth_letters(self) -> None:
        assert normalize_unicode("ＡＢＣ") == "ABC"  # ＡＢＣ

    def test_mathematical_bold(self) -> None:
        assert normalize_unicode("\U0001d407\U0001d41e\U0001d425\U0001d425\U0001d428") == "Hello"

    def test_no_decomposition_passes_through(self) -> None:
        assert normalize_unicode("日本語") == "日本語"

    def test_plain_ascii_unchanged(self) -> None:
        assert normalize_unicode("plain-name_1.txt") == "plain-name_1.txt"

    def test_empty(self) -> None:
        assert normalize_unicode("") == ""


# ---------------------------------------------------------------------------
# replace_separators
# ---------------------------------------------------------------------------


class TestReplaceSeparators:
    def test_use_underscore(self) -> None:
        config = SanitizeConfig(use_underscore=True)
        assert replace_separators("my file name", config) == "my_file_name"

    def test_remove_underscore(self) -> None:
        config = SanitizeConfig(remove_underscore=True)
        assert replace_separators("my_file_name", config) == "my file name"

    def test_separator(self) -> None:
        config = SanitizeConfig(separator="-")
        assert replace_separators("my file name", config) == "my-file-name"

    def test_use_underscore_wins_over_separator(self) -> None:
        config = SanitizeConfig(use_underscore=True, separator="-")
        assert replace_separators("a b", config) == "a_b"

    def test_remove_underscore_wins_over_separator(self) -> None:
        config = SanitizeConfig(remove_underscore=True, separator="-")
        assert replace_separators("a_b c", config) == "a b c"

    def test_no_options_no_change(self) -> None:
        assert replace_separators("a b_c", SanitizeConfig()) == "a b_c"

    def test_old_new_swap(self) -> None:
        config = SanitizeConfig(old_separator="-", new_separator="_")
        assert replace_separators("a-b-c", config) == "a_b_c"

    def test_swap_applied_after_substitution(self) -> None:
        config = SanitizeConfig(use_underscore=True, old_separator="_", new_separator=".")
        assert replace_separators("a b", config) == "a.b"

    def test_swap_requires_both(self) -> None:
        config = SanitizeConfig(old_separator="-")
        assert replace_separators("a-b", config) == "a-b"

    def test_underscore_leaves_no_space(self) -> None:
        config = SanitizeConfig(use_underscore=True)
        assert " " not in replace_separators(" a b_c  d ", config)

    def test_remove_underscore_leaves_no_underscore(self) -> None:
        config = SanitizeConfig(remove_underscore=True)
        assert "_" not in replace_separators("_a b_c__d_", config)


# ---------------------------------------------------------------------------
# remove_invalid_chars
# ---------------------------------------------------------------------------


class TestRemoveInvalidChars:
    def test_visible_ascii_kept(self) -> None:
        name = "a b!#$%&'()+,;=@[]^`{}~.txt"
        assert remove_invalid_chars(name) == name

    def test_latin1_kept(self) -> None:
        assert remove_invalid_chars("©®±ÿ") == "©®±ÿ"

    def test_letters_and_digits_kept(self) -> None:
        assert remove_invalid_chars("日本語٣") == "日本語٣"

    def test_control_chars_removed(self) -> None:
        assert remove_invalid_chars("a\tb\nc\x7f") == "abc"

    def test_emoji_removed(self) -> None:
        assert remove_invalid_chars("party\U0001f389.txt") == "party.txt"

    def test_replaced_with_separator(self) -> None:
        assert remove_invalid_chars("a•b", "-") == "a-b"

    def test_replacement_is_literal(self) -> None:
        assert remove_invalid_chars("a•b", "\\1") == "a\\1b"

    def test_output_closed_over_allowed_set(self) -> None:
        name = "x\u2022\u200b\u2603\U0001f600\x01 y"
        result = remove_invalid_chars(name)
        for c in result:
            assert (" " <= c <= "~") or ("\xa0" <= c <= "\xff") or c.isalnum() or c in "_.-"


# ---------------------------------------------------------------------------
# to_title_case
# ---------------------------------------------------------------------------


class TestToTitleCase:
    def test_default_space(self) -> None:
        assert to_title_case("hello WORLD") == "Hello World"

    def test_custom_separator(self) -> None:
        assert to_title_case("hello_world.txt", "_") == "Hello_World.txt"

    def test_single_char_words(self) -> None:
        assert to_title_case("a b c") == "A B C"

    def test_empty_segments_preserved(self) -> None:
        assert to_title_case("a--b", "-") == "A--B"

    def test_multichar_separator(self) -> None:
        assert to_title_case("one::TWO", "::") == "One::Two"

    def test_empty(self) -> None:
        assert to_title_case("") == ""


# ---------------------------------------------------------------------------
# split_extension / timestamp prefix
# ---------------------------------------------------------------------------


class TestSplitExtension:
    def test_simple(self) -> None:
        assert split_extension("report.pdf") == ("report", ".pdf")

    def test_multiple_dots(self) -> None:
        assert split_extension("archive.tar.gz") == ("archive.tar", ".gz")

    def test_no_extension(self) -> None:
        assert split_extension("Makefile") == ("Makefile", "")

    def test_dotfile(self) -> None:
        assert split_extension(".bashrc") == ("", ".bashrc")


class TestTimestampPrefix:
    def test_detects_prefix(self) -> None:
        assert has_timestamp_prefix("20240115_093000_report.pdf")

    def test_requires_trailing_underscore(self) -> None:
        assert not has_timestamp_prefix("20240115_093000.pdf")

    def test_non_ascii_digits_rejected(self) -> None:
        assert not has_timestamp_prefix("٢٠٢٤٠١١٥_٠٩٣٠٠٠_x")

    def test_adds_prefix(self) -> None:
        assert add_timestamp_prefix("report.pdf", TS) == "20240115_093000_report.pdf"

    def test_adds_prefix_without_extension(self) -> None:
        assert add_timestamp_prefix("notes", TS) == "20240115_093000_notes"

    def test_idempotent(self) -> None:
        once = add_timestamp_prefix("report.pdf", TS)
        assert add_timestamp_prefix(once, "19990101_000000") == once

    def test_prefix_inside_stem_not_counted(self) -> None:
        assert add_timestamp_prefix("x_20240115_093000_a", TS) == f"{TS}_x_20240115_093000_a"


class TestFormatTimestamp:
    def test_format(self) -> None:
        mtime = datetime(2024, 1, 15, 9, 30, 0).timestamp()
        assert format_timestamp(mtime) == TS

    def test_fixed_width(self) -> None:
        assert re.fullmatch(r"\d{8}_\d{6}", format_timestamp(0.0))


# ---------------------------------------------------------------------------
# sanitize_name  (full pipeline)
# ---------------------------------------------------------------------------


class TestSanitizeName:
    def test_clean_name_unchanged(self) -> None:
        assert sanitize_name("document.txt") == "document.txt"

    def test_default_keeps_spaces(self) -> None:
        assert sanitize_name("my document.txt") == "my document.txt"

    def test_diacritics_and_underscore(self) -> None:
        config = SanitizeConfig(use_underscore=True)
        assert sanitize_name("résumé final.pdf", TS, config) == "resume_final.pdf"

    def test_trims_whitespace(self) -> None:
        assert sanitize_name("  padded.txt  ") == "padded.txt"

    def test_underscore_substitution_precedes_trim(self) -> None:
        config = SanitizeConfig(use_underscore=True)
        assert sanitize_name(" padded.txt ", TS, config) == "_padded.txt_"

    def test_invalid_chars_become_separator(self) -> None:
        config = SanitizeConfig(separator="-")
        assert sanitize_name("a b•c.txt", TS, config) == "a-b-c.txt"

    def test_invalid_chars_dropped_without_separator(self) -> None:
        assert sanitize_name("star★.txt") == "star.txt"

    def test_title_case_with_separator(self) -> None:
        config = SanitizeConfig(separator="_", title_case=True)
        assert sanitize_name("hello_world.txt", TS, config) == "Hello_World.txt"

    def test_title_case_default_space(self) -> None:
        config = SanitizeConfig(title_case=True)
        assert sanitize_name("the QUICK fox.md", TS, config) == "The Quick Fox.md"

    def test_timestamp_prefix(self) -> None:
        config = SanitizeConfig(include_timestamp=True)
        assert sanitize_name("report.pdf", TS, config) == "20240115_093000_report.pdf"

    def test_timestamp_prefix_repeated_run(self) -> None:
        config = SanitizeConfig(include_timestamp=True)
        once = sanitize_name("report.pdf", TS, config)
        assert sanitize_name(once, "20991231_235959", config) == once

    def test_title_case_then_timestamp(self) -> None:
        config = SanitizeConfig(separator="_", title_case=True, include_timestamp=True)
        assert sanitize_name("my report.pdf", TS, config) == "20240115_093000_My_Report.pdf"

    def test_empty_result(self) -> None:
        assert sanitize_name("★★") == ""

    def test_empty_input(self) -> None:
        assert sanitize_name("") == ""

    def test_fullwidth_name(self) -> None:
        assert sanitize_name("ｆｉｌｅ.txt") == "file.txt"


class TestSanitizeConfig:
    def test_defaults(self) -> None:
        config = SanitizeConfig()
        assert config.separator == ""
        assert not config.use_underscore
        assert not config.include_timestamp

    def test_conflict(self) -> None:
        assert SanitizeConfig(use_underscore=True, remove_underscore=True).has_conflict

    def test_no_conflict(self) -> None:
        assert not SanitizeConfig(use_underscore=True).has_conflict


class TestIsNameClean:
    def test_clean(self) -> None:
        assert is_name_clean("document.txt")

    def test_dirty(self) -> None:
        assert not is_name_clean("café.txt")

    def test_depends_on_config(self) -> None:
        assert is_name_clean("a b.txt")
        assert not is_name_clean("a b.txt", TS, SanitizeConfig(use_underscore=True))
