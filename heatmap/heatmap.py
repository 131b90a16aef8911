"""
    A Heatmap is a fixed number of equal-width time slices, each holding a
    full histogram. Samples are filed into a slice by their timestamp, so a
    heatmap answers "what did the distribution look like at time t".

    Everything is allocated up front: the histograms are built once and
    reused by `clear`.
"""
import time
from dataclasses import replace

from .data import HeatmapConfig, Slice, MergeResult, U64_MAX
from .errors import SampleTooEarly, SampleTooLate, WindowError, RecordError
from .histogram import Histogram
from .logger import default_logger


class Heatmap:

  __slots__ = ('config', 'start', 'stop', 'entries_total', '_slices', 'log')

  def __init__(self, config, logger=None):
    self.config = config
    self.start = config.start
    self.stop = config.stop
    self.entries_total = 0
    self.log = logger or default_logger()

    per_slice = config.slice_memory
    self._slices = [
      Histogram(config.max_value, config.precision, per_slice)
      for _ in range(config.slice_count)
    ]

    self.log.dbg(
      "built {} slices of {}ns starting at {}",
      config.slice_count, config.slice_duration, config.start
    )

  @staticmethod
  def builder():
    return HeatmapBuilder()

  @property
  def slice_count(self):
    return self.config.slice_count

  @property
  def slice_duration(self):
    return self.config.slice_duration

  def __len__(self):
    return self.config.slice_count

  def index_for(self, time):
    if time < self.start:
      raise SampleTooEarly(time, self.start, self.stop)

    if time >= self.stop:
      raise SampleTooLate(time, self.start, self.stop)

    return (time - self.start) // self.config.slice_duration

  def increment(self, time, value):
    self.increment_by(time, value, 1)

  def increment_by(self, time, value, count):
    """ Record `count` observations of `value` in the slice covering `time`.
        The entry counter only moves once the histogram took the sample.
    """
    i = self.index_for(time)
    self._slices[i].increment_by(value, count)
    self.entries_total = min(self.entries_total + count, U64_MAX)

  def get(self, time, value):
    return self._slices[self.index_for(time)].get(value)

  def percentile(self, time, p):
    return self._slices[self.index_for(time)].percentile(p)

  def slice_at(self, index):
    if not 0 <= index < self.config.slice_count:
      raise IndexError(f"slice {index} out of range")

    start = self.start + index * self.config.slice_duration
    return Slice(
      start=start,
      stop=start + self.config.slice_duration,
      histogram=self._slices[index].clone()
    )

  def slices(self):
    return SliceIterator(self)

  def __iter__(self):
    return SliceIterator(self)

  def merge(self, other):
    """ Replay every bucket of `other` into this heatmap at the absolute start
        time of the slice it came from. Buckets that land outside of this
        window, or that this heatmap's histograms refuse, are dropped and
        counted in the result.
    """
    merged = 0
    dropped = 0

    # Snapshot first, so merging a heatmap into itself reads stable data
    for s in list(other.slices()):
      for value, count in s.histogram.iterate():
        try:
          self.increment_by(s.start, value, count)
          merged += count
        except (WindowError, RecordError):
          dropped += count

    self.log.dbg("merged {} entries, dropped {}", merged, dropped)
    return MergeResult(merged=merged, dropped=dropped)

  def clear(self, start):
    """ Empty every slice and restart the window at `start` """
    config = self.config.rebased(start)

    for h in self._slices:
      h.clear()

    self.config = config
    self.start = config.start
    self.stop = config.stop
    self.entries_total = 0

    self.log.dbg("cleared, window is now [{}, {})", self.start, self.stop)

  def clone(self):
    ret = Heatmap.__new__(Heatmap)
    ret.config = self.config
    ret.start = self.start
    ret.stop = self.stop
    ret.entries_total = self.entries_total
    ret.log = self.log
    ret._slices = [h.clone() for h in self._slices]
    return ret

  def __repr__(self):
    return (
      f"Heatmap([{self.start}, {self.stop}), slices={self.slice_count}, "
      f"entries={self.entries_total})"
    )


class SliceIterator:
  """ Walks a heatmap's slices in time order, yielding owned snapshots """

  __slots__ = ('heatmap', 'index')

  def __init__(self, heatmap):
    self.heatmap = heatmap
    self.index = 0

  def __iter__(self):
    return self

  def __next__(self):
    if self.index >= len(self.heatmap):
      raise StopIteration

    s = self.heatmap.slice_at(self.index)
    self.index += 1
    return s


class HeatmapBuilder:
  """
      Immutable: every option returns a new builder, so a partially
      configured builder can be shared and specialized freely.

        hm = Heatmap.builder().slice_count(10).slice_duration(1_000).start(0).build()
  """

  __slots__ = ('_config', '_start_set')

  def __init__(self, config=None, start_set=False):
    self._config = config or HeatmapConfig()
    self._start_set = start_set

  def _with_(self, start_set=None, **changes):
    return HeatmapBuilder(
      replace(self._config, **changes),
      self._start_set if start_set is None else start_set
    )

  @property
  def config(self):
    return self._config

  def precision(self, digits):
    return self._with_(precision=digits)

  def max_memory(self, nbytes):
    return self._with_(max_memory=nbytes)

  def max_value(self, value):
    return self._with_(max_value=value)

  def slice_duration(self, ns):
    return self._with_(slice_duration=ns)

  def slice_count(self, count):
    return self._with_(slice_count=count)

  def start(self, ts):
    return self._with_(start_set=True, start=ts)

  def build(self, logger=None):
    config = self._config
    if not self._start_set:
      config = config.rebased(time.time_ns())

    return Heatmap(config, logger=logger)
