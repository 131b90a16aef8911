"""
    Plain text persistence. The first line holds the configuration:

      <precision> <max_memory> <max_value> <slice_duration> <slice_count> <start>

    followed by one line per non-empty bucket, in slice then value order:

      <slice_start> <value> <count>
"""
from .data import HeatmapConfig
from .errors import MalformedState, ConfigError, HistogramError, WindowError, RecordError
from .heatmap import Heatmap
from .logger import default_logger


def lines(heatmap):
  yield " ".join(str(v) for v in heatmap.config.header())
  for s in heatmap.slices():
    for value, count in s.histogram.iterate():
      yield f"{s.start} {value} {count}"


def dumps(heatmap):
  return "".join(line + "\n" for line in lines(heatmap))


def dump(heatmap, fp):
  for line in lines(heatmap):
    fp.write(line)
    fp.write("\n")


def save(heatmap, path):
  with open(path, "w") as fp:
    dump(heatmap, fp)


def _ints_(line_no, line, expected, log):
  parts = line.split()
  if len(parts) != expected:
    log.err("line {}: expected {} fields, got {}", line_no, expected, len(parts))
    raise MalformedState(line_no, line, f"expected {expected} fields, got {len(parts)}")

  try:
    return [int(p) for p in parts]
  except ValueError as e:
    log.err("line {}: non-integer field", line_no)
    raise MalformedState(line_no, line, "non-integer field") from e


def load(fp, logger=None):
  log = logger or default_logger()
  heatmap = None
  replayed = 0

  for line_no, line in enumerate(fp, start=1):
    if not line.strip():
      continue

    if heatmap is None:
      precision, max_memory, max_value, duration, count, start = \
        _ints_(line_no, line, 6, log)
      try:
        heatmap = Heatmap(HeatmapConfig(
          precision=precision,
          max_memory=max_memory,
          max_value=max_value,
          slice_duration=duration,
          slice_count=count,
          start=start
        ), logger=log)
      except (ConfigError, HistogramError) as e:
        log.err("line {}: {}", line_no, e)
        raise MalformedState(line_no, line, str(e)) from e
      continue

    slice_start, value, count = _ints_(line_no, line, 3, log)
    try:
      heatmap.increment_by(slice_start, value, count)
    except (WindowError, RecordError) as e:
      log.err("line {}: {}", line_no, e)
      raise MalformedState(line_no, line, str(e)) from e
    replayed += 1

  if heatmap is None:
    raise MalformedState(0, "", "missing header line")

  log.dbg("loaded {} buckets, {} entries", replayed, heatmap.entries_total)
  return heatmap


def loads(text, logger=None):
  return load(text.splitlines(), logger=logger)


def load_file(path, logger=None):
  with open(path) as fp:
    return load(fp, logger=logger)
