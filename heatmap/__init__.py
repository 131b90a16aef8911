from .data import HeatmapConfig, Slice, MergeResult, U64_MAX
from .errors import (
  HeatmapError,
  ConfigError,
  HistogramError,
  RecordError,
  WindowError,
  SampleTooEarly,
  SampleTooLate,
  MalformedState,
)
from .histogram import Histogram
from .heatmap import Heatmap, HeatmapBuilder, SliceIterator
from .config import DefaultConfig, builder_from_map
from .logger import ObsLevel, TextLogger, NullLogger, EntryLogger
from . import codec


def builder():
  return HeatmapBuilder()
