from hdrh.histogram import HdrHistogram

from .data import U64_MAX
from .errors import HistogramError, RecordError


class Histogram:
  """
      One slice worth of value distribution. Wraps an HdrHistogram, which
      quantizes values to `precision` significant digits, and exposes just
      what the heatmap needs from it.
  """

  LOWEST_TRACKABLE = 1

  __slots__ = ('max_value', 'precision', 'max_memory', '_hdr')

  def __init__(self, max_value, precision, max_memory=0):
    self.max_value = max_value
    self.precision = precision
    self.max_memory = max_memory

    try:
      self._hdr = HdrHistogram(self.LOWEST_TRACKABLE, max_value, precision)
    except (ValueError, ZeroDivisionError) as e:
      raise HistogramError(
        f"Cannot build histogram max_value={max_value} precision={precision}: {e}"
      ) from e

    if max_memory and self.footprint > max_memory:
      raise HistogramError(
        f"Histogram needs {self.footprint} bytes, budget is {max_memory}"
      )

  @property
  def footprint(self):
    """ Bytes used by the bucket counters """
    return self._hdr.counts_len * self._hdr.word_size

  @property
  def total_count(self):
    return self._hdr.get_total_count()

  def increment_by(self, value, count=1):
    if count <= 0:
      raise RecordError(value, count, "count must be positive")

    if value < 0 or value > self.max_value:
      raise RecordError(value, count, f"value outside of [0, {self.max_value}]")

    if self.get(value) + count > U64_MAX:
      raise RecordError(value, count, "bucket count would overflow")

    if not self._hdr.record_value(value, count):
      raise RecordError(value, count, f"value outside of [0, {self.max_value}]")

  def increment(self, value):
    self.increment_by(value, 1)

  def get(self, value):
    """ Count in the bucket holding `value`, 0 when nothing is there """
    if value < 0:
      return 0

    try:
      return self._hdr.get_count_at_value(value)
    except IndexError:
      return 0

  def percentile(self, p):
    if not self._hdr.get_total_count():
      return 0
    return self._hdr.get_value_at_percentile(p)

  def clear(self):
    self._hdr.reset()

  def clone(self):
    ret = Histogram(self.max_value, self.precision)
    ret.max_memory = self.max_memory
    if self._hdr.get_total_count():
      ret._hdr.add(self._hdr)
    return ret

  def iterate(self):
    """ (value, count) for every non-empty bucket, lowest value first. Each
        value is the low edge of its bucket, so it never exceeds max_value
        and records back into the same bucket.
    """
    lowest = self._hdr.get_lowest_equivalent_value
    return [
      (lowest(item.value_iterated_to), item.count_at_value_iterated_to)
      for item in self._hdr.get_recorded_iterator()
    ]

  def __iter__(self):
    return iter(self.iterate())

  def __repr__(self):
    return f"Histogram(max_value={self.max_value}, count={self.total_count})"
