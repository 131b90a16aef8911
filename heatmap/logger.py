from enum import Enum
from collections import namedtuple
import time
import sys


class ObsLevel(Enum):
  ERR = 0
  INF = 1
  DBG = 2


LogEntry = namedtuple('LogEntry', ('level', 'at', 'scope', 'text', 'values'))


class BaseLogger:
  def __init__(self, scope="", level=ObsLevel.INF):
    self.scope = scope
    self._level_val = level.value

  def set_level(self, new_level):
    self._level_val = new_level.value

  def handle(self, level, at, text, values):
    pass

  def dbg(self, msg, *vals):
    if self._level_val >= ObsLevel.DBG.value:
      self.handle(ObsLevel.DBG, time.time(), msg, vals)

  def inf(self, msg, *vals):
    if self._level_val >= ObsLevel.INF.value:
      self.handle(ObsLevel.INF, time.time(), msg, vals)

  def err(self, msg, *vals):
    if self._level_val >= ObsLevel.ERR.value:
      self.handle(ObsLevel.ERR, time.time(), msg, vals)


class NullLogger(BaseLogger):
  """ Does nothing successfully """
  pass


class EntryLogger(BaseLogger):
  """ Keeps every entry in memory. Handy for poking at what got logged """

  def __init__(self, scope="", level=ObsLevel.DBG):
    super().__init__(scope=scope, level=level)
    self.entries = []

  def handle(self, level, at, text, values):
    self.entries.append(LogEntry(level, at, self.scope, text, values))

  def texts(self, level=None):
    return [
      e.text.format(*e.values) for e in self.entries
      if level is None or e.level == level
    ]


class TextLogger(BaseLogger):

  FORMAT = "{level} {hh:02d}:{mm:02d}:{ss:02d}{tag} {text}\n"

  def __init__(self, writeable=None, scope="", level=ObsLevel.INF):
    # None writes to whatever sys.stderr is at the time of the call
    self.writeable = writeable
    self.tag = f" [{scope}]" if scope else ""
    super().__init__(scope=scope, level=level)

  def handle(self, level, at, text, values):
    out = self.writeable or sys.stderr
    message_text = text.format(*values)
    ts = time.localtime(at)
    out.write(self.FORMAT.format(
      level=level.name,
      hh=ts.tm_hour, mm=ts.tm_min, ss=ts.tm_sec,
      tag=self.tag,
      text=message_text
    ))


def default_logger():
  return TextLogger(scope="heatmap")
