import logging
from unittest import mock

import pytest

from sysmon.collectors import (
    CpuCollector,
    CpuStats,
    DataCollector,
    DataPoint,
    MemoryCollector,
    MemStats,
    NetStats,
    NetworkCollector,
    cpu_usage,
    memory_usage,
    network_speeds,
    parse_cpu_stats,
    parse_meminfo,
    parse_net_dev,
)

LO_RX, LO_TX = 5000, 5000
ETH_RX, ETH_TX = 200000, 100000


def net_dev_text(eth_rx=ETH_RX, eth_tx=ETH_TX, lo_rx=LO_RX, lo_tx=LO_TX):
    return (
        "Inter-|   Receive                                                |  Transmit\n"
        " face |bytes    packets errs drop fifo frame compressed multicast|bytes"
        "    packets errs drop fifo colls carrier compressed\n"
        f"    lo: {lo_rx} 10 0 0 0 0 0 0 {lo_tx} 10 0 0 0 0 0 0\n"
        f"  eth0: {eth_rx} 20 0 0 0 0 0 0 {eth_tx} 30 0 0 0 0 0 0\n"
    )


def test_data_point_defaults_are_zero():
    point = DataPoint()
    assert (
        point.cpu_usage,
        point.mem_usage,
        point.net_rx,
        point.net_tx,
        point.net_total_rx,
        point.net_total_tx,
    ) == (0.0, 0.0, 0.0, 0.0, 0.0, 0.0)


def test_parse_cpu_stats_reads_first_line():
    stats = parse_cpu_stats("cpu  10 20 30 40 50 60 70 0 0 0\ncpu0 1 2 3 4 5 6 7\n")
    assert stats == CpuStats(10, 20, 30, 40, 50, 60, 70)


def test_cpu_stats_total():
    assert CpuStats(1, 2, 3, 4, 5, 6, 7).total() == 28


@pytest.mark.parametrize("text", ["", "intr 1 2 3", "cpu 1 2 3", "cpu 1 2 x 4 5 6 7"])
def test_parse_cpu_stats_rejects_bad_input(text):
    with pytest.raises(ValueError):
        parse_cpu_stats(text)


def test_cpu_usage_same_totals_is_zero():
    stats = CpuStats(1, 2, 3, 4, 5, 6, 7)
    assert cpu_usage(stats, stats) == 0.0


def test_cpu_usage_all_idle_is_zero():
    prev = CpuStats(10, 0, 0, 10, 0, 0, 0)
    curr = CpuStats(10, 0, 0, 110, 0, 0, 0)
    assert cpu_usage(prev, curr) == 0.0


def test_cpu_usage_all_busy_is_hundred():
    prev = CpuStats(10, 0, 0, 10, 0, 0, 0)
    curr = CpuStats(60, 10, 40, 10, 0, 0, 0)
    assert cpu_usage(prev, curr) == 100.0


def test_cpu_usage_stays_in_range():
    prev = CpuStats(100, 5, 50, 1000, 3, 1, 2)
    curr = CpuStats(150, 7, 80, 1200, 9, 1, 4)
    assert 0.0 < cpu_usage(prev, curr) < 100.0


def test_parse_meminfo():
    text = "MemTotal:       2000 kB\nMemFree:   500 kB\nMemAvailable:   1500 kB\n"
    assert parse_meminfo(text) == MemStats(2000, 1500)


def test_parse_meminfo_missing_fields_default_to_zero():
    assert parse_meminfo("Buffers: 12 kB\n") == MemStats(0, 0)


def test_memory_usage_zero_total():
    assert memory_usage(MemStats(0, 0)) == 0.0


def test_memory_usage_half():
    assert memory_usage(MemStats(2000, 1000)) == 50.0


def test_memory_usage_bounds():
    assert memory_usage(MemStats(4096, 4096)) == 0.0
    assert memory_usage(MemStats(4096, 0)) == 100.0


def test_parse_net_dev_specific_and_total():
    specific, total = parse_net_dev(net_dev_text(), "eth0")
    assert specific == NetStats(ETH_RX, ETH_TX)
    assert total == NetStats(ETH_RX + LO_RX, ETH_TX + LO_TX)


def test_parse_net_dev_missing_interface():
    with pytest.raises(ValueError, match="Interface wlan9 not found"):
        parse_net_dev(net_dev_text(), "wlan9")


def test_parse_net_dev_malformed_line():
    text = "h1\nh2\n  eth0: 1 2 3\n"
    with pytest.raises(ValueError):
        parse_net_dev(text, "eth0")


def test_network_speeds_zero_interval():
    prev, curr = NetStats(0, 0), NetStats(4096, 8192)
    assert network_speeds(prev, curr, prev, curr, 0) == (0.0, 0.0, 0.0, 0.0)


def test_network_speeds_scale_by_kib_and_interval():
    prev_s, curr_s = NetStats(1000, 2000), NetStats(9192, 6096)
    prev_t, curr_t = NetStats(5000, 5000), NetStats(25480, 13192)
    interval = 2.0
    speeds = network_speeds(prev_s, curr_s, prev_t, curr_t, interval)
    diffs = (
        curr_s.rx_bytes - prev_s.rx_bytes,
        curr_s.tx_bytes - prev_s.tx_bytes,
        curr_t.rx_bytes - prev_t.rx_bytes,
        curr_t.tx_bytes - prev_t.tx_bytes,
    )
    for speed, diff in zip(speeds, diffs):
        assert speed * interval * 1024 == pytest.approx(diff)


def test_data_collector_is_abstract():
    with pytest.raises(TypeError):
        DataCollector()


def test_cpu_collector_measures_change(tmp_path):
    stat = tmp_path / "stat"
    stat.write_text("cpu 100 0 0 100 0 0 0\n")
    collector = CpuCollector(stat, sample_seconds=0.0)

    def advance(_seconds):
        stat.write_text("cpu 200 0 0 100 0 0 0\n")

    with mock.patch("time.sleep", side_effect=advance):
        collector.collect()
    assert collector.data.cpu_usage == 100.0


def test_cpu_collector_missing_file_resets(tmp_path, caplog):
    collector = CpuCollector(tmp_path / "absent", sample_seconds=0.0)
    collector.data.cpu_usage = 42.0
    with caplog.at_level(logging.ERROR):
        collector.collect()
    assert collector.data.cpu_usage == 0.0
    assert "Error in CpuCollector" in caplog.text


def test_memory_collector(tmp_path):
    meminfo = tmp_path / "meminfo"
    meminfo.write_text("MemTotal: 4096 kB\nMemAvailable: 4096 kB\n")
    collector = MemoryCollector(meminfo)
    collector.data.mem_usage = 42.0
    collector.collect()
    assert collector.data.mem_usage == 0.0


def test_memory_collector_missing_file(tmp_path, caplog):
    collector = MemoryCollector(tmp_path / "absent")
    collector.data.mem_usage = 42.0
    with caplog.at_level(logging.ERROR):
        collector.collect()
    assert collector.data.mem_usage == 0.0
    assert "Error in MemoryCollector" in caplog.text


def test_network_collector_measures_rates(tmp_path):
    dev = tmp_path / "dev"
    dev.write_text(net_dev_text())
    steps = 3
    collector = NetworkCollector("eth0", dev, sample_seconds=1.0)

    def advance(_seconds):
        dev.write_text(net_dev_text(eth_rx=ETH_RX + steps * 1024, eth_tx=ETH_TX))

    with mock.patch("time.sleep", side_effect=advance):
        collector.collect()
    assert collector.data.net_rx == pytest.approx(steps)
    assert collector.data.net_tx == 0.0
    assert collector.data.net_total_rx == pytest.approx(steps)
    assert collector.data.net_total_tx == 0.0


def test_network_collector_unknown_interface_resets(tmp_path, caplog):
    dev = tmp_path / "dev"
    dev.write_text(net_dev_text())
    collector = NetworkCollector("wlan9", dev, sample_seconds=0.0)
    collector.data.net_rx = 7.0
    collector.data.net_total_tx = 7.0
    with caplog.at_level(logging.ERROR):
        collector.collect()
    assert (collector.data.net_rx, collector.data.net_total_tx) == (0.0, 0.0)
    assert "Interface wlan9 not found" in caplog.text