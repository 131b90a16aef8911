import io

import pytest

from heatmap import TextLogger, ObsLevel, EntryLogger, MalformedState, codec


def test_text_logger_format():
  buf = io.StringIO()
  log = TextLogger(buf, scope="heatmap")
  log.inf("merged {} entries", 4)
  log.dbg("hidden")

  line = buf.getvalue()
  assert line.startswith("INF ")
  assert line.endswith(" [heatmap] merged 4 entries\n")
  assert line.count("\n") == 1


def test_levels():
  log = EntryLogger(level=ObsLevel.ERR)
  log.inf("nope")
  log.err("bad {}", 1)

  assert log.texts() == ["bad 1"]


def test_set_level():
  log = EntryLogger(level=ObsLevel.INF)
  log.dbg("hidden")
  log.set_level(ObsLevel.DBG)
  log.dbg("shown {}", 2)

  assert log.texts() == ["shown 2"]


def test_malformed_load_logs_error():
  log = EntryLogger(level=ObsLevel.DBG)
  with pytest.raises(MalformedState):
    codec.loads("9 0 1000 1000 10 0\n", logger=log)

  assert len(log.texts(ObsLevel.ERR)) == 1
