"""Tests for the tracer module."""

import json
import os

import numpy as np
import pytest


class TestSummarize:
    """Tests for object summarization."""

    def test_numpy_array_summary(self):
        """Test that numpy arrays are summarized with shape and type."""
        from sigilforge.tracer import summarize

        arr = np.zeros((6, 6), dtype=np.int64)
        summary = summarize(arr)

        assert "ndarray" in summary
        assert "6x6" in summary
        assert "int64" in summary

    def test_summary_capped_length(self):
        """Test that summary never exceeds max length."""
        from sigilforge.tracer import summarize

        large_dict = {f"key_{i}": f"value_{i}" for i in range(100)}
        summary = summarize(large_dict, max_len=20)

        assert len(summary) <= 20

    def test_list_summary(self):
        from sigilforge.tracer import summarize

        summary = summarize([1, 2, 3, 4, 5])

        assert "list" in summary
        assert "len=5" in summary

    def test_string_summary(self):
        """Long strings are replaced by their length and a hash."""
        from sigilforge.tracer import summarize

        summary = summarize("a" * 1000)

        assert "str" in summary
        assert "len=1000" in summary
        assert len(summary) <= 200

    def test_none_and_numbers(self):
        from sigilforge.tracer import summarize

        assert summarize(None) == "None"
        assert summarize(3) == "3"
        assert summarize(0.123456789) == "0.1235"

    def test_enum_keys_and_values(self):
        from sigilforge.models import LayoutMode
        from sigilforge.tracer import summarize

        assert summarize(LayoutMode.VENN) == "venn"
        assert "keys=[standard,venn]" in summarize({LayoutMode.STANDARD: 1, LayoutMode.VENN: 2})

    def test_letter_set_summary(self):
        from sigilforge.models import LetterSet
        from sigilforge.tracer import summarize

        assert summarize(LetterSet(letters=("b", "c"), numbers=(2, 3))) == "LetterSet('bc')"

    def test_sigil_summary(self, clarity_letters, default_config):
        from sigilforge.sigil import generate_sigil
        from sigilforge.tracer import summarize

        sigil = generate_sigil(clarity_letters, 200.0, 5, "venn", default_config)
        summary = summarize(sigil)

        assert summary.startswith("Sigil(venn,segments=8")

    def test_generic_model_summary(self):
        from sigilforge.models import GuideCircle
        from sigilforge.tracer import summarize

        assert summarize(GuideCircle(cx=0, cy=0, r=1)).startswith("GuideCircle(fields=")


class TestTracerSpan:
    """Tests for tracer span functionality."""

    def test_span_nesting(self, capsys):
        """Test that spans produce proper indentation."""
        from sigilforge.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO")
        tracer = get_tracer()

        try:
            with tracer.span("outer", module="test"):
                with tracer.span("inner", module="test"):
                    tracer.event("inside")
        finally:
            configure_tracer(enabled=False)

        lines = capsys.readouterr().err.strip().split("\n")

        assert len(lines) == 5
        assert "test:outer" in lines[0] and "start" in lines[0]
        assert "    test:inner  inside" in lines[2]
        assert "end ok" in lines[4]

    def test_failed_span_logs_error(self, capsys):
        from sigilforge.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="INFO")
        tracer = get_tracer()

        try:
            with pytest.raises(ValueError):
                with tracer.span("boom", module="test"):
                    raise ValueError("bad")
        finally:
            configure_tracer(enabled=False)

        err = capsys.readouterr().err
        assert "ERROR" in err
        assert "ValueError: bad" in err

    def test_level_filtering(self, capsys):
        from sigilforge.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=True, level="WARN")
        tracer = get_tracer()

        try:
            tracer.event("quiet")
            tracer.event("loud", level="WARN")
        finally:
            configure_tracer(enabled=False)

        err = capsys.readouterr().err
        assert "quiet" not in err
        assert "loud" in err

    def test_tracer_disabled_no_output(self, capsys):
        """Test that disabled tracer produces no output."""
        from sigilforge.tracer import configure_tracer, get_tracer

        configure_tracer(enabled=False)
        tracer = get_tracer()

        with tracer.span("test", module="test"):
            tracer.event("should not appear")

        assert capsys.readouterr().err == ""

    def test_file_and_json_output(self, temp_dir, capsys):
        """Trace lines are mirrored to a file, with JSON records when requested."""
        from sigilforge.tracer import configure_tracer, get_tracer

        path = os.path.join(temp_dir, "trace.log")
        configure_tracer(enabled=True, level="INFO", file_path=path, json_output=True)
        tracer = get_tracer()

        try:
            tracer.event("hello", layouts=4)
        finally:
            configure_tracer(enabled=False)

        with open(path, encoding="utf-8") as f:
            lines = f.read().strip().split("\n")

        assert "hello layouts=4" in lines[0]
        record = json.loads(lines[1])
        assert record["message"] == "hello layouts=4"
        assert record["meta"] == {"layouts": "4"}


class TestTraceDecorator:
    """Tests for the @trace decorator."""

    def test_decorator_runs_function(self):
        """Test that decorated function executes normally."""
        from sigilforge.tracer import configure_tracer, trace

        configure_tracer(enabled=False)

        @trace(label="test_func")
        def my_func(x):
            return x * 2

        assert my_func(5) == 10

    def test_decorator_logs_span(self, capsys):
        from sigilforge.tracer import configure_tracer, trace

        @trace(label="double", arg_names=["x"])
        def double(x):
            return x * 2

        configure_tracer(enabled=True)
        try:
            assert double(x=4) == 8
        finally:
            configure_tracer(enabled=False)

        err = capsys.readouterr().err
        assert "double  start x=4" in err
        assert "end ok" in err

    def test_decorator_with_exception(self):
        """Test that decorator handles exceptions properly."""
        from sigilforge.tracer import configure_tracer, trace

        configure_tracer(enabled=False)

        @trace(label="failing_func")
        def failing_func():
            raise ValueError("test error")

        with pytest.raises(ValueError):
            failing_func()
