import pytest

from heatmap import Heatmap, NullLogger


@pytest.fixture
def builder():
  return Heatmap.builder() \
    .max_value(1_000_000) \
    .slice_duration(1_000) \
    .slice_count(10) \
    .start(0)


@pytest.fixture
def hm(builder):
  return builder.build(logger=NullLogger())
