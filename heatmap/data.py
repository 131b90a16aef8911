from dataclasses import dataclass, field, replace

from .errors import ConfigError


U64_MAX = (1 << 64) - 1


@dataclass(frozen=True)
class HeatmapConfig:
  precision: int = 3
  max_memory: int = 0
  max_value: int = 1_000_000_000
  slice_duration: int = 60_000_000_000
  slice_count: int = 60
  start: int = 0

  def __post_init__(self):
    for name in ('precision', 'max_memory', 'max_value', 'start'):
      if getattr(self, name) < 0:
        raise ConfigError(f"{name} must not be negative")

    if self.slice_duration <= 0:
      raise ConfigError("slice_duration must be positive")

    if self.slice_count <= 0:
      raise ConfigError("slice_count must be positive")

    if self.stop > U64_MAX:
      raise ConfigError(
        f"Window end {self.stop} does not fit in 64 bits"
      )

  @property
  def stop(self):
    return self.start + self.slice_duration * self.slice_count

  @property
  def slice_memory(self):
    """ Per-slice byte budget, 0 meaning unlimited """
    return self.max_memory // self.slice_count

  def rebased(self, start):
    if start == self.start:
      return self

    return replace(self, start=start)

  def header(self):
    return (
      self.precision,
      self.max_memory,
      self.max_value,
      self.slice_duration,
      self.slice_count,
      self.start
    )


@dataclass(frozen=True)
class Slice:
  start: int
  stop: int
  histogram: object = field(compare=False)

  @property
  def total_count(self):
    return self.histogram.total_count

  def percentile(self, p):
    return self.histogram.percentile(p)

  def __iter__(self):
    return iter(self.histogram.iterate())

  def __contains__(self, time):
    return self.start <= time < self.stop


@dataclass(frozen=True)
class MergeResult:
  merged: int = 0
  dropped: int = 0

