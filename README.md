# gamedevtools

Small diagnostics helpers for game development, built on the standard
`logging` module and with no third-party dependencies.

## Modules

### `gamedevtools.debug_tools`

`DebugTools(debug_mode=True, log_file=None, logger=None)` wraps a
`logging.Logger` (by default the `gamedevtools` logger).

- `log`, `log_info`, `log_silent` log at INFO, `log_verbose` at DEBUG and
  `log_warning` at WARNING. Each returns the message it logged.
- `log_warning_value(name, value)` logs `name: value`. It formats floats
  with `%f` and ints with `%d`.
- `log_error(message)` prefixes the message with the caller's file, line
  and function. `log_todo(message)` logs a multi-line TODO note with the
  same context.
- `log_fatal(message)` and `log_fatal_user()` log at CRITICAL and then raise
  `FatalError`.
- `log_on_screen(message, color)` and `log_todo_on_screen(message)` append
  a `ScreenMessage` (text, duration, `ScreenColor`) to
  `DebugTools.screen_messages`. The durations are 15 s and 5 s.
  `ScreenColor.from_name` ignores case and falls back to white.
- `log_to_file(message)` appends a timestamped entry with the caller's file
  name, function and line to `log_file` (default `DeveloperLogs.txt` in the
  working directory). It returns `False` if the write fails.
- `safe_check(obj, name)` and `safe_check_multiple(objects)` return whether
  the objects are set. For each `None` they log an "invalid object" error in
  debug mode, and raise `FatalError` otherwise. `safe_check_multiple` takes
  a mapping of names to objects or any iterable.
- `safe_get(value, context_name, value_name)` logs an error and returns
  `None` when the value is missing. Otherwise it returns the value.

`maps_equal(map_a, map_b)` is true when both mappings hold the same keys
with equal values.

### `gamedevtools.event_logger`

`GameplayEventLogger(clock=None)` records `GameplayEventEntry` values. Each
entry holds an event name, a context, a game time and a UTC timestamp. The
optional `clock` callable supplies the game time; without it the game time
is `0.0`. All access is guarded by a lock.

- `log_event(event_name, context="")` returns the new entry. It returns
  `None`, with a warning, for an empty name.
- `events()`, `len(logger)` and `clear()` give access to the log.
- `search_by_name(term)` and `search_by_context(term)` match substrings
  without regard to case.
- `dump_to_log()` writes every entry to the logger.
- `export_csv(path)` writes a
  `GameTime,EventName,Context,UTC_Timestamp` file. It quotes fields with
  `sanitize_for_csv` and returns `False` when the log is empty or the write
  fails.

### `gamedevtools.memory_tracker`

`MemoryUsageTracker(sample_interval=5.0)` samples registered objects once
per `sample_interval` seconds of time passed to `tick(delta_time)`.

- `start_tracking(interval)` sets the interval (at least 0.01 s) and
  resumes sampling. `stop_tracking()` pauses it.
- `register(obj)` and `unregister(obj)` hold objects weakly where possible.
  Objects that have been collected, or whose `pending_kill` attribute is
  true, are dropped at the next sample.
- `tracked_info()` returns the `MemoryUsageInfo` records of the last sample.
  Each record holds `object_name`, `tracked_object`, `memory_bytes` and
  `num_referenced_objects`. `dump_to_log()` logs them.

`estimate_memory_usage(obj)` and `count_referenced_objects(obj, visited)`
are the estimators used for each sample, and can be called directly.

## Example

```python
from gamedevtools.event_logger import GameplayEventLogger
from gamedevtools.memory_tracker import MemoryUsageTracker

events = GameplayEventLogger()
events.log_event("PlayerSpawned", "level=1")
events.log_event("ItemPickedUp", "sword, rare")
print(len(events), [e.event_name for e in events.search_by_name("player")])
events.export_csv("events.csv")

class Inventory:
    def __init__(self):
        self.items = ["sword", "shield"]

inventory = Inventory()
tracker = MemoryUsageTracker()
tracker.start_tracking(1.0)
tracker.register(inventory)
tracker.tick(1.0)
for info in tracker.tracked_info():
    print(info.object_name, info.memory_bytes, info.num_referenced_objects)
```

## What it does not do

- Screen messages are only collected in `DebugTools.screen_messages`.
  Nothing draws them; the game is expected to display them.
- Memory figures are rough estimates made from `sys.getsizeof` and an
  object's fields. They are not measurements of process memory.
- Time in the tracker advances only through `tick`. No timer or thread
  drives it.
- There is no command-line program.

## Tests

```
pip install -e .[test]
pytest
```