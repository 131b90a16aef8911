import prometheus_client.core as pmc
import prometheus_client.registry as pmr
from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily


class HeatmapCollector(pmr.Collector):
  """ Exposes a heatmap to prometheus_client: the entry counter, plus the
      percentiles of the most recent slice that has anything in it.
  """

  quantiles = (0.5, 0.9, 0.95, 0.99, 0.999)

  def __init__(self, heatmap, name, desc=""):
    self.heatmap = heatmap
    self.name = name
    self.desc = desc

  def register(self, registry=pmc.REGISTRY):
    registry.register(self)
    return self

  def latest_slice(self):
    latest = None
    for s in self.heatmap.slices():
      if s.total_count:
        latest = s
    return latest

  def collect(self):
    entries = CounterMetricFamily(
      f"{self.name}_entries",
      f"{self.desc} (entries recorded)" if self.desc else "Entries recorded",
    )
    entries.add_metric([], self.heatmap.entries_total)
    yield entries

    s = self.latest_slice()
    if s is None:
      return

    gauge = GaugeMetricFamily(
      self.name,
      self.desc or "Latest slice percentiles",
      labels=["quantile"]
    )
    for q in self.quantiles:
      gauge.add_metric([str(q)], s.percentile(q * 100))
    yield gauge
