class HeatmapError(Exception):
  pass


class ConfigError(HeatmapError, ValueError):
  pass


class HistogramError(HeatmapError):
  """ A slice histogram could not be constructed """
  pass


class RecordError(HeatmapError):
  """ The slice histogram refused a value/count pair """

  def __init__(self, value, count, reason=""):
    self.value = value
    self.count = count
    super().__init__(f"Cannot record {value} x{count}" + (f": {reason}" if reason else ""))


class WindowError(HeatmapError):
  """ A timestamp fell outside of the heatmap window [start, stop) """

  def __init__(self, time, start, stop):
    self.time = time
    self.start = start
    self.stop = stop
    super().__init__(f"Sample at {time} is outside of window [{start}, {stop})")


class SampleTooEarly(WindowError):
  pass


class SampleTooLate(WindowError):
  pass


class MalformedState(HeatmapError, ValueError):
  def __init__(self, line_no, line, reason):
    self.line_no = line_no
    self.line = line
    super().__init__(f"line {line_no}: {reason}: {line!r}")
