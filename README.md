# qdesktop

Core services for a small embedded Linux desktop:

- `qdesktop.calculator`: an infix calculator that handles `+ - × ÷ %`, square
  root `√`, square `²` and parentheses (`evaluate_expression`, `Calculator`).
  Tokens are separated by spaces. Malformed input or unbalanced parentheses
  give `"Error"`; division by zero gives `0` and the root of a negative
  number gives `0`.
- `qdesktop.file_explorer`: browse, search, rename and delete entries under a
  home directory (`FileExplorer`, `format_file_size`). Hidden entries are not
  listed; away from home the listing starts with a `..` folder entry.
- `qdesktop.alarm_clock`: alarms that fire once or repeat on given weekdays
  (Monday is `0`), kept in `alarms.json` (`AlarmClock`, `Alarm`,
  `parse_time`, `format_time`). While an alarm is due, each check toggles the
  buzzer so it pulses; a one-shot alarm switches itself off once its minute
  has passed.
- `qdesktop.alarm_service`: checks the alarms in a background thread every
  2 seconds, guarded by a lock file so only one instance runs
  (`AlarmService`, `ServiceAlreadyRunning`).
- `qdesktop.service_manager`: starts and stops a list of services in order
  (`ServiceManager`).
- `qdesktop.beep`: a reference-counted driver that writes `1` or `0` to the
  sysfs buzzer file `/sys/devices/platform/leds/leds/beep/brightness`
  (`Beep`). The device is opened on the first `acquire()` and closed on the
  last `release()`; it also works as a context manager.
- `qdesktop.system_monitor`: reads the CPU temperature from
  `/sys/class/hwmon/hwmon0/temp1_input` and formats it as `"12.34°C"`, or
  `"N/A"` when the file cannot be read (`SystemMonitor`, `read_cpu_temp`).
- `qdesktop.autostart`: writes a desktop entry that runs the program with
  `-service` (`ensure_service`).

## Install

```
pip install .
```

## Running

Start the alarm service together with the CPU temperature monitor, which logs
each new reading:

```
qdesktop
```

Run only the background services, such as the alarm checker:

```
qdesktop -service
```

Options:

| Option | Meaning |
| --- | --- |
| `-service` | run only the background services |
| `--data-dir DIR` | directory for `alarms.json` (default `$XDG_DATA_HOME/QDesktop`, or `~/.local/share/QDesktop`) |
| `--lock-file PATH` | single-instance lock file (default `qdesktop_alarm_service.lock` in the temporary directory) |
| `--beep-device PATH` | buzzer brightness file |
| `--sensor PATH` | CPU temperature sensor file |
| `--run-for SECONDS` | stop after this many seconds instead of running until interrupted |

Unknown arguments are ignored. If another instance already holds the lock,
the command exits with status `-1`.

## Library use

```python
from qdesktop.calculator import evaluate_expression, Calculator

evaluate_expression("( 2 + 3 ) × 4")   # "20"

calc = Calculator()
calc.append_number("7")
calc.append_operation("×")
calc.append_number("6")
calc.calculate()
calc.display                            # "42"
```

```python
from qdesktop.file_explorer import format_file_size

format_file_size(1536)                  # "2 KB"
```

```python
import datetime as dt
from qdesktop.alarm_clock import AlarmClock
from qdesktop.beep import Beep

with AlarmClock("alarms-data", Beep("/tmp/beep")) as clock:
    clock.add_alarm("07:30", [0, 1, 2, 3, 4], "Work days")
    clock.check_alarms(dt.datetime(2024, 1, 1, 7, 30))
```

## What it does not do

There is no graphical interface: the command runs the alarm service and, in
desktop mode, logs CPU temperature readings. The calculator, file explorer and
alarm clock are available as library classes only. Opening a regular file
with `FileExplorer.open` does nothing and returns `False`.

## Tests

```
pip install .[test]
pytest
```