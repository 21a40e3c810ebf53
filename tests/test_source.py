import pytest

from jdruby.source import SourceFile, SourceSpan


def test_at_is_zero_width():
    span = SourceSpan.at(5)
    assert span.start == 5
    assert span.end == 5
    assert span.is_empty()


def test_default_span_is_empty():
    assert SourceSpan() == SourceSpan(0, 0)
    assert SourceSpan().is_empty()


def test_merge_covers_both():
    merged = SourceSpan(2, 5).merge(SourceSpan(4, 9))
    assert merged == SourceSpan(2, 9)
    assert SourceSpan(4, 9).merge(SourceSpan(2, 5)) == merged


def test_merge_contained_span_is_outer():
    outer = SourceSpan(1, 10)
    assert outer.merge(SourceSpan(3, 4)) == outer


def test_len_matches_bounds():
    span = SourceSpan(3, 7)
    assert len(span) == span.end - span.start
    assert not span.is_empty()


def test_display():
    assert str(SourceSpan(3, 7)) == "3..7"


def test_start_after_end_rejected():
    with pytest.raises(ValueError):
        SourceSpan(5, 2)


def test_line_col_start_of_file():
    assert SourceFile("main.rb", "ab\ncd").line_col(0) == (1, 1)


def test_line_col_second_line():
    assert SourceFile("main.rb", "ab\ncd").line_col(3) == (2, 1)


def test_line_col_uses_byte_offsets():
    ascii_file = SourceFile("a.rb", "a\nx")
    wide_file = SourceFile("b.rb", "\u00e9\nx")
    assert wide_file.line_col(3) == ascii_file.line_col(2)


def test_line_col_monotonic_columns_on_one_line():
    f = SourceFile("a.rb", "abcdef")
    cols = [f.line_col(i)[1] for i in range(6)]
    assert cols == sorted(cols)
    assert len(set(cols)) == 6


def test_slice_ascii():
    f = SourceFile("main.rb", "puts 42")
    assert f.slice(SourceSpan(5, 7)) == "42"


def test_slice_multibyte():
    f = SourceFile("main.rb", "h\u00e9llo")
    assert f.slice(SourceSpan(0, 3)) == "h\u00e9"


def test_slice_not_on_char_boundary():
    f = SourceFile("main.rb", "h\u00e9llo")
    with pytest.raises(ValueError):
        f.slice(SourceSpan(0, 2))


def test_slice_out_of_range():
    f = SourceFile("main.rb", "abc")
    with pytest.raises(IndexError):
        f.slice(SourceSpan(1, 10))