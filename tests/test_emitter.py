"""Tests for debugkit.emitter — mask gating, sinks, laziness, timestamps."""

import io
from datetime import datetime

import pytest

from debugkit import emitter as _emitter_mod
from debugkit.emitter import (
    Emitter, dbg, dbg_always, dbg_each, dlog, dlog_always,
    get_emitter, init_emitter, write_line,
)
from debugkit.topic import Topic
from debugkit.topicset import TopicSet


INFO = Topic(0, "info")
WARNING = Topic(1, "warning")
ERROR = Topic(2, "error")
CLICK = Topic(4)

STAMP = "2026-10-18 09:05:07.123"


class TestConditional:

    def test_readme_scenario(self, make_emitter, buf):
        """mask={error}: info is dropped, error is written."""
        out = make_emitter(TopicSet([ERROR]))
        out.dbg(INFO, "All good")
        assert buf.getvalue() == ""
        out.dbg(ERROR, "Bang!")
        assert buf.getvalue() == "debug-error: Bang!\n"

    def test_unlabeled_topic(self, make_emitter, buf):
        make_emitter(TopicSet([CLICK])).dbg(CLICK, "click")
        assert buf.getvalue() == "debug-4: click\n"

    def test_exactly_one_line_when_active(self, make_emitter, buf):
        make_emitter(TopicSet([INFO])).dbg(INFO, "x")
        assert buf.getvalue().count("\n") == 1

    def test_per_call_mask_overrides_default(self, make_emitter, buf):
        out = make_emitter(TopicSet([ERROR]))
        out.dbg(INFO, "shown", mask=TopicSet([INFO]))
        out.dbg(ERROR, "hidden", mask=TopicSet([INFO]))
        assert buf.getvalue() == "debug-info: shown\n"

    def test_mask_is_keyword_only(self, make_emitter):
        """Methods take the mask by keyword; the module functions take it positionally."""
        out = make_emitter(TopicSet())
        with pytest.raises(TypeError):
            out.dbg(INFO, "m", TopicSet([INFO]))
        with pytest.raises(TypeError):
            out.dlog(INFO, "m", TopicSet([INFO]))

    def test_default_mask_is_empty(self, buf):
        Emitter(file=buf).dbg(INFO, "x")
        assert buf.getvalue() == ""

    def test_catch_all_mask(self, make_emitter, buf):
        out = make_emitter(TopicSet.catch_all())
        out.dbg(INFO, "a")
        out.dbg(CLICK, "b")
        assert buf.getvalue() == "debug-info: a\ndebug-4: b\n"

    def test_format_overrides(self, make_emitter, buf):
        out = make_emitter(TopicSet([INFO]))
        out.dbg(INFO, "kala", prefix="debug", label_separator=None,
                message_separator=None, terminator=None)
        assert buf.getvalue() == "debugkala"

    def test_emitter_level_settings(self, buf):
        out = Emitter(TopicSet([INFO]), file=buf, prefix="DBG",
                      label_separator="_", message_separator=":",
                      terminator="[EOF]\n")
        out.dbg(INFO, "kala")
        assert buf.getvalue() == "DBG_info:kala[EOF]\n"

    def test_active(self, make_emitter):
        out = make_emitter(TopicSet([ERROR]))
        assert out.active(ERROR)
        assert not out.active(INFO)
        assert out.active(INFO, TopicSet([INFO]))


class TestLazyMessage:

    def test_callable_not_invoked_when_filtered(self, make_emitter):
        def boom():
            raise AssertionError("message built for a filtered topic")
        make_emitter(TopicSet([ERROR])).dbg(INFO, boom)

    def test_callable_invoked_once(self, make_emitter, buf):
        calls = []

        def message():
            calls.append(1)
            return "built"
        make_emitter(TopicSet([INFO])).dbg(INFO, message)
        assert calls == [1]
        assert buf.getvalue() == "debug-info: built\n"

    def test_non_string_result(self, make_emitter, buf):
        make_emitter(TopicSet([INFO])).dbg(INFO, lambda: 42)
        assert buf.getvalue() == "debug-info: 42\n"


class TestMultiTopic:

    def test_only_matching_topic_written(self, make_emitter, buf):
        out = make_emitter(TopicSet([WARNING]))
        written = out.dbg_each([INFO, WARNING, ERROR], "m")
        assert written == 1
        assert buf.getvalue() == "debug-warning: m\n"

    def test_list_order(self, make_emitter, buf):
        out = make_emitter(TopicSet([INFO, ERROR]))
        out.dbg_each([ERROR, WARNING, INFO], "m")
        assert buf.getvalue() == "debug-error: m\ndebug-info: m\n"

    def test_message_evaluated_once(self, make_emitter):
        calls = []
        out = make_emitter(TopicSet.catch_all())
        out.dbg_each([INFO, WARNING, ERROR], lambda: calls.append(1) or "m")
        assert calls == [1]

    def test_no_match_no_evaluation(self, make_emitter):
        calls = []
        out = make_emitter(TopicSet())
        assert out.dbg_each([INFO, ERROR], lambda: calls.append(1) or "m") == 0
        assert calls == []


class TestUnconditional:

    def test_uses_catch_all_topic(self, make_emitter, buf):
        make_emitter().dbg_always("Burn!")
        assert buf.getvalue() == "debug-all: Burn!\n"

    def test_with_topic(self, make_emitter, buf):
        make_emitter().dbg_always("Burn!", Topic(63, "critical"))
        assert buf.getvalue() == "debug-critical: Burn!\n"

    def test_ignores_mask(self, make_emitter, buf):
        make_emitter(TopicSet()).dbg_always("m", INFO)
        assert buf.getvalue() == "debug-info: m\n"


class TestTimestamped:

    def test_timestamp_format(self, make_emitter):
        assert make_emitter().timestamp() == STAMP

    def test_dlog_leveled(self, make_emitter, buf):
        make_emitter(TopicSet([INFO])).dlog(INFO, "Timestamped debug entry.")
        assert buf.getvalue() == f"{STAMP} [info]: Timestamped debug entry.\n"

    def test_dlog_unlabeled_topic(self, make_emitter, buf):
        make_emitter(TopicSet([CLICK])).dlog(CLICK, "m")
        assert buf.getvalue() == f"{STAMP} [4]: m\n"

    def test_dlog_filtered(self, make_emitter, buf):
        make_emitter(TopicSet([ERROR])).dlog(INFO, "m")
        assert buf.getvalue() == ""

    def test_dlog_never_writes_label_separator(self, buf, fixed_clock):
        out = Emitter(TopicSet([INFO]), file=buf, label_separator="-",
                      clock=fixed_clock)
        out.dlog(INFO, "m")
        assert "-info" not in buf.getvalue()

    def test_dlog_always_bare_timestamp(self, make_emitter, buf):
        make_emitter().dlog_always("started")
        assert buf.getvalue() == f"{STAMP}: started\n"

    def test_dlog_always_with_topic(self, make_emitter, buf):
        make_emitter().dlog_always("m", ERROR, message_separator=" ")
        assert buf.getvalue() == f"{STAMP} [error] m\n"

    def test_clock_read_at_call_time(self, buf):
        times = iter([datetime(2026, 10, 18, 9, 5, 7), datetime(2026, 10, 18, 9, 5, 8)])
        out = Emitter(TopicSet([INFO]), file=buf, clock=lambda: next(times))
        out.dlog(INFO, "a")
        out.dlog(INFO, "b")
        assert buf.getvalue().splitlines()[1].startswith("2026-10-18 09:05:08")


class TestSinks:

    def test_none_sink_discards(self):
        out = Emitter(TopicSet.catch_all(), file=None)
        out.dbg(INFO, "nowhere")
        out.dbg_always("nowhere")

    def test_bytes_sink(self, bbuf):
        Emitter(TopicSet([INFO]), file=bbuf).dbg(INFO, "héllo")
        assert bbuf.getvalue() == "debug-info: héllo\n".encode("utf-8")

    def test_text_stream_with_buffer(self):
        raw = io.BytesIO()
        stream = io.TextIOWrapper(raw, encoding="utf-8")
        stream.write("before ")
        Emitter(TopicSet([INFO]), file=stream).dbg(INFO, "m")
        assert raw.getvalue() == b"before debug-info: m\n"

    def test_closed_sink_is_noop(self, buf):
        buf.close()
        Emitter(TopicSet([INFO]), file=buf).dbg(INFO, "m")

    def test_flush_failure_ignored(self):
        class Sink(io.StringIO):
            def flush(self):
                raise OSError("disk gone")
        sink = Sink()
        write_line(sink, "line\n")
        assert sink.getvalue() == "line\n"

    def test_file(self, tmp_path):
        path = tmp_path / "out.log"
        with open(path, "w", encoding="utf-8") as f:
            Emitter(TopicSet([INFO]), file=f).dbg(INFO, "m")
        assert path.read_text(encoding="utf-8") == "debug-info: m\n"

    def test_default_is_stderr(self, capsys):
        Emitter(TopicSet([ERROR])).dbg(ERROR, "Bang!")
        captured = capsys.readouterr()
        assert captured.err == "debug-error: Bang!\n"
        assert captured.out == ""

    def test_per_call_file(self, make_emitter, buf, bbuf):
        make_emitter(TopicSet([INFO])).dbg(INFO, "m", file=bbuf)
        assert buf.getvalue() == ""
        assert bbuf.getvalue() == b"debug-info: m\n"


class TestModuleLevel:

    def test_get_emitter_creates_default(self):
        assert _emitter_mod._emitter is None
        out = get_emitter()
        assert isinstance(out, Emitter)
        assert get_emitter() is out

    def test_init_emitter_replaces(self, buf):
        out = init_emitter(mask=TopicSet([INFO]), file=buf)
        assert get_emitter() is out

    def test_dbg(self, capsys):
        mask = TopicSet([ERROR])
        dbg(INFO, mask, "All good")
        dbg(ERROR, mask, "Bang!")
        assert capsys.readouterr().err == "debug-error: Bang!\n"

    def test_dbg_none_mask_uses_singleton(self, buf):
        init_emitter(mask=TopicSet([INFO]), file=buf)
        dbg(INFO, None, "m")
        assert buf.getvalue() == "debug-info: m\n"

    def test_dbg_each(self, buf):
        init_emitter(file=buf)
        assert dbg_each([INFO, WARNING, ERROR], TopicSet([WARNING]), "m") == 1
        assert buf.getvalue() == "debug-warning: m\n"

    def test_dbg_always(self, capsys):
        dbg_always("Burn!", Topic(63, "critical"))
        assert capsys.readouterr().err == "debug-critical: Burn!\n"

    def test_dlog(self, buf, fixed_clock):
        init_emitter(file=buf, clock=fixed_clock)
        dlog(INFO, TopicSet([INFO]), "m")
        dlog_always("n")
        assert buf.getvalue() == f"{STAMP} [info]: m\n{STAMP}: n\n"

    def test_format_kwargs_forwarded(self, buf):
        init_emitter(file=buf)
        dbg(INFO, TopicSet([INFO]), "m", prefix="dbg", terminator=None)
        assert buf.getvalue() == "dbg-info: m"
