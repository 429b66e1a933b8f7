from model.metrics import ContainerMetrics, RawStatsRecord
from metrics.parser import SnapshotParser


def test_parse_reference_payload(docker_stats):
    raw = RawStatsRecord.from_payload(docker_stats["payloads"]["f3f177b2b3b4"])

    metrics = SnapshotParser().parse(raw, "f3f177b2b3b4", "my-container", timestamp="2021-09-01T12:34:56Z")

    assert isinstance(metrics, ContainerMetrics)
    assert metrics.container_id == "f3f177b2b3b4"
    assert metrics.container_name == "my-container"
    assert metrics.timestamp == "2021-09-01T12:34:56Z"
    for key, value in docker_stats["expected"]["f3f177b2b3b4"].items():
        assert getattr(metrics, key) == value, key


def test_parse_never_raises_and_zeroes_bad_fields(docker_stats):
    raw = RawStatsRecord.from_payload(docker_stats["payloads"]["0badc0ffee00"])

    metrics = SnapshotParser().parse(raw, "0badc0ffee00", "N/A", timestamp="2021-09-01T12:34:56Z")

    assert metrics.container_cpu_usage_percent == 0.0
    assert metrics.container_memory_usage_percent == 0.0
    assert metrics.container_memory_usage_bytes == 0
    assert metrics.container_memory_limit_bytes == 0
    assert metrics.container_network_receive_bytes_total == 0
    assert metrics.container_network_transmit_bytes_total == 0
    assert metrics.container_block_read_bytes == 0
    assert metrics.container_block_write_bytes == 0
    assert metrics.container_pids == 0


def test_byte_pair_sides_are_independent():
    raw = RawStatsRecord(mem_usage="34.5MiB / bogus", net_io="0B / 1.2MB", block_io="1kB/2kB/3kB")

    metrics = SnapshotParser().parse(raw, "abc", "web")

    assert metrics.container_memory_usage_bytes == 36175872
    assert metrics.container_memory_limit_bytes == 0
    assert metrics.container_network_receive_bytes_total == 0
    assert metrics.container_network_transmit_bytes_total == 1258291
    # three parts is not a pair
    assert metrics.container_block_read_bytes == 0
    assert metrics.container_block_write_bytes == 0


def test_missing_fields_and_negative_pids():
    raw = RawStatsRecord.from_payload({"CPUPerc": None, "PIDs": "-4", "MemPerc": "12.5"})

    metrics = SnapshotParser().parse(raw, "abc", "web")

    assert metrics.container_cpu_usage_percent == 0.0
    assert metrics.container_memory_usage_percent == 12.5
    assert metrics.container_pids == 0
    assert metrics.timestamp.endswith("Z")


def test_oversized_numbers_are_zeroed():
    huge = "9" * 400
    raw = RawStatsRecord(
        cpu_perc=f"{huge}%",
        mem_usage=f"{huge}MiB / 1GiB",
        net_io=f"1kB / {huge}GB",
        pids="9" * 5000,
    )

    metrics = SnapshotParser().parse(raw, "abc", "web")

    assert metrics.container_cpu_usage_percent == 0.0
    assert metrics.container_memory_usage_bytes == 0
    assert metrics.container_memory_limit_bytes == 1024**3
    assert metrics.container_network_receive_bytes_total == 1024
    assert metrics.container_network_transmit_bytes_total == 0
    assert metrics.container_pids == 0


def test_pids_accept_plain_ascii_integers_only():
    parser = SnapshotParser()

    for pids, expected in [("42", 42), (" +7 ", 7), ("1_000", 0), ("١٢٣", 0), ("12.0", 0), ("9223372036854775808", 0)]:
        metrics = parser.parse(RawStatsRecord(pids=pids), "abc", "web")
        assert metrics.container_pids == expected, pids
