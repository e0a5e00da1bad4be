# sysmon

A small terminal monitor for Linux that shows CPU usage, memory usage and
network throughput. Figures are read from `/proc/stat`, `/proc/meminfo` and
`/proc/net/dev`, each collector sampling over a one-second window, and drawn
in a curses screen with progress bars and four-sample traffic graphs.

## Installing

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Running

```
sysmon
```

By default the configuration is read from `../config.ini`, relative to the
current directory. Another file can be given with `-c` / `--config`:

```
sysmon --config /etc/sysmon.ini
```

The dashboard needs a terminal with colour support; otherwise it stops with
`RuntimeError: Terminal does not support colors`. Press Ctrl-C (or send
SIGTERM) to quit.

## Configuration

Settings are read from an INI file with a `[monitor]` section:

```ini
[monitor]
interface = eth0
update_interval_ms = 1000
```

- `interface` is the network interface whose traffic is shown next to the
  total over all interfaces. The default is `wlp0s20f3`.
- `update_interval_ms` is the pause between two samples of each collector.
  It must be a positive integer; an invalid value is logged and the previous
  value (by default 1000) is kept.

Keys in other sections are ignored. If the file cannot be read, an error is
logged and the defaults are used.

## Using the library

The pieces can be used on their own:

```python
from sysmon.collectors import MemoryCollector, parse_meminfo, memory_usage
from sysmon.config import parse_config
from sysmon.console_output import format_report

stats = parse_meminfo("MemTotal: 1000 kB\nMemAvailable: 250 kB\n")
print(memory_usage(stats))          # 75.0

config = parse_config("[monitor]\ninterface = eth0\n")
print(config.interface)             # eth0

collector = MemoryCollector()
collector.collect()
print(format_report(collector.data))
```

- `sysmon.collectors` holds the parsers (`parse_cpu_stats`, `parse_meminfo`,
  `parse_net_dev`), the calculations (`cpu_usage`, `memory_usage`,
  `network_speeds`) and the collectors `CpuCollector`, `MemoryCollector` and
  `NetworkCollector`. Each collector takes the path of the file it reads, so
  it can be pointed at a sample file; on a read or parse error it logs the
  problem and reports zeros.
- `sysmon.aggregator.DataAggregator` runs each collector in its own thread and
  hands the merged `DataPoint` to every subscribed callback. It can be used as
  a context manager, and `latest` returns a copy of the most recent snapshot.
- `sysmon.console_output.ConsoleOutput` writes a plain-text report to a stream
  after clearing the screen.
- `sysmon.curses_output.CursesOutput` draws the dashboard into a curses
  window; `progress_bar`, `network_graph`, `format_value` and
  `cycle_interface` are the helpers it uses.
- `sysmon.cli.build_aggregator` builds an aggregator with the three collectors
  for a `Config`.

## Limitations

- Only Linux is supported, since all figures come from `/proc`.
- The `sysmon` command does not read keys: the interface is fixed by the
  configuration for the whole run, and Ctrl-C is the only way to quit.
  `CursesOutput.handle_input` can read `q`, `n` and `p` for programs that
  drive the screen themselves.
- Nothing is stored; figures are shown as they are sampled.