from .errors import ConfigError
from .heatmap import HeatmapBuilder


DefaultConfig = {
  # Significant decimal digits kept for every recorded value
  "precision": 3,

  # Total byte budget for all slices, split evenly. 0 means no limit
  "max_memory": 0,

  # Largest value any slice can record
  "max_value": 1_000_000_000,

  # Width of one slice, in nanoseconds
  "slice_duration": 60_000_000_000,

  # How many slices make up the window
  "slice_count": 60,

  # Window origin in nanoseconds. None means "now" at build time
  "start": None,
}


def builder_from_map(config_map):
  """ Turn a plain mapping, typically a section of the app's own config,
      into a HeatmapBuilder. Missing keys fall back to DefaultConfig.
  """
  unknown = set(config_map) - set(DefaultConfig)
  if unknown:
    raise ConfigError(f"Unknown heatmap options: {', '.join(sorted(unknown))}")

  merged = dict(DefaultConfig)
  merged.update(config_map)

  builder = HeatmapBuilder() \
    .precision(merged["precision"]) \
    .max_memory(merged["max_memory"]) \
    .max_value(merged["max_value"]) \
    .slice_duration(merged["slice_duration"]) \
    .slice_count(merged["slice_count"])

  if merged["start"] is not None:
    builder = builder.start(merged["start"])

  return builder
