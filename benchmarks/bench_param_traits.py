#!/usr/bin/env python3
"""
Benchmark: param traits encode/decode latency per type

Measures, for each registered application type:
  1. Encode latency into a fresh MessageWriter
  2. Decode latency from a MessageReader
  3. Full packed message round trip (version byte + CRC32C)

Every decoded value is compared with the original.

Usage:
  $ python benchmarks/bench_param_traits.py --runs 10000 --unit us
"""
from __future__ import annotations

import argparse
import time
from datetime import datetime, timezone
from statistics import quantiles
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from paramtraits import (
    DevToolsInfo,
    FileInfo,
    HostPortPair,
    HttpResponseHeaders,
    LoadTimingInfo,
    MessageReader,
    MessageWriter,
    RequestStatus,
    RequestStatusCode,
    ResourceType,
    UploadData,
    Url,
    pack_params,
    read_param,
    unpack_params,
    write_param,
)


# ---------------------------------------------------------------------------
# Sample values
# ---------------------------------------------------------------------------
def make_samples(body_size: int) -> dict[str, tuple[Any, type]]:
    upload = UploadData(identifier=42)
    upload.append_bytes(b"\xab" * body_size)
    upload.append_file_range("/var/tmp/upload.bin", offset=0, length=body_size)
    now = datetime.now(timezone.utc)
    return {
        "Url": (Url("https://example.com/search?q=param+traits"), Url),
        "ResourceType": (ResourceType.IMAGE, ResourceType),
        "RequestStatus": (RequestStatus(status=RequestStatusCode.FAILED, error=-105), RequestStatus),
        "UploadData": (upload, UploadData),
        "HostPortPair": (HostPortPair(host="example.com", port=443), HostPortPair),
        "HttpResponseHeaders": (
            HttpResponseHeaders.from_http_text(
                "HTTP/1.1 200 OK\r\nContent-Type: text/html\r\nCache-Control: no-store\r\n"
            ),
            HttpResponseHeaders,
        ),
        "LoadTimingInfo": (
            LoadTimingInfo(base_time=now, dns_start=0, dns_end=3, send_start=4, send_end=5),
            LoadTimingInfo,
        ),
        "DevToolsInfo": (
            DevToolsInfo(http_status_code=200, http_status_text="OK", response_headers=[("Content-Type", "text/html")]),
            DevToolsInfo,
        ),
        "FileInfo": (FileInfo(size=body_size, last_modified=now, last_accessed=now, creation_time=now), FileInfo),
    }


# ---------------------------------------------------------------------------
# Benchmark helpers with validation
# ---------------------------------------------------------------------------
def bench_traits(label: str, value: Any, value_type: type, runs: int) -> dict:
    encode_latencies = []
    decode_latencies = []
    validation_errors = 0
    size = 0
    for run_num in tqdm(range(runs), desc=label, leave=False):
        start = time.perf_counter()
        writer = MessageWriter()
        write_param(writer, value, value_type)
        data = writer.getvalue()
        encode_latencies.append(time.perf_counter() - start)

        start = time.perf_counter()
        decoded = read_param(value_type, MessageReader(data))
        decode_latencies.append(time.perf_counter() - start)

        size = len(data)
        if decoded != value:
            print(f"❌ Run {run_num}: {label} round trip mismatch")
            validation_errors += 1
    return {
        "encode": encode_latencies,
        "decode": decode_latencies,
        "size": size,
        "validation_errors": validation_errors,
        "total_runs": runs,
    }


def bench_message(samples: dict[str, tuple[Any, type]], runs: int) -> dict:
    values = [value for value, _ in samples.values()]
    types = [value_type for _, value_type in samples.values()]
    latencies = []
    validation_errors = 0
    size = 0
    for run_num in tqdm(range(runs), desc="Packed message", leave=False):
        start = time.perf_counter()
        data = pack_params(*values, types=types)
        decoded = unpack_params(data, types)
        latencies.append(time.perf_counter() - start)
        size = len(data)
        if decoded != values:
            print(f"❌ Run {run_num}: packed message round trip mismatch")
            validation_errors += 1
    return {"latencies": latencies, "size": size, "validation_errors": validation_errors, "total_runs": runs}


# ---------------------------------------------------------------------------
# Reporting
# ---------------------------------------------------------------------------
UNITS = {
    "s": 1,
    "ms": 1e3,
    "us": 1e6,
    "ns": 1e9,
}


def summarise(latencies: list[float], unit: str = "us") -> dict[str, float]:
    if len(latencies) < 2:
        return {"p50": float("nan"), "p95": float("nan"), "p99": float("nan")}
    scaled = [t * UNITS[unit] for t in latencies]
    cuts = quantiles(scaled, n=100)
    return {"p50": cuts[49], "p95": cuts[94], "p99": cuts[98]}


def print_table(results: dict[str, dict], unit: str = "us"):
    console = Console()
    table = Table(title="Param Traits Benchmark Results", box=box.SIMPLE_HEAVY)
    table.add_column("Type")
    table.add_column("Wire bytes")
    table.add_column(f"encode p50 ({unit}, ↓)")
    table.add_column(f"encode p99 ({unit}, ↓)")
    table.add_column(f"decode p50 ({unit}, ↓)")
    table.add_column(f"decode p99 ({unit}, ↓)")
    table.add_column("Success Rate (%)")
    for label, res in results.items():
        enc = summarise(res["encode"], unit)
        dec = summarise(res["decode"], unit)
        success_rate = (res["total_runs"] - res["validation_errors"]) / res["total_runs"] * 100
        success_color = "green" if success_rate == 100.0 else "red"
        table.add_row(
            label,
            str(res["size"]),
            f"{enc['p50']:.2f}",
            f"{enc['p99']:.2f}",
            f"{dec['p50']:.2f}",
            f"{dec['p99']:.2f}",
            f"[{success_color}]{success_rate:.1f}%[/{success_color}]",
        )
    console.print(table)


def main():
    parser = argparse.ArgumentParser(description="Benchmark param traits encode/decode")
    parser.add_argument("--runs", type=int, default=1000, help="Number of runs per type")
    parser.add_argument("--size", type=int, default=1024, help="Upload body size in bytes")
    parser.add_argument("--unit", choices=["us", "ms", "ns"], default="us", help="Latency unit")
    args = parser.parse_args()

    samples = make_samples(args.size)
    print(f"Benchmarking {args.runs} runs per type with {args.size} byte upload bodies")

    results = {}
    for label, (value, value_type) in samples.items():
        results[label] = bench_traits(label, value, value_type, args.runs)
    print_table(results, args.unit)

    message = bench_message(samples, args.runs)
    stats = summarise(message["latencies"], args.unit)
    print(
        f"Packed message ({message['size']} bytes): "
        f"p50={stats['p50']:.2f}{args.unit} p95={stats['p95']:.2f}{args.unit} p99={stats['p99']:.2f}{args.unit}"
    )
    if message["validation_errors"]:
        print(f"⚠️  {message['validation_errors']} packed message round trips did not match")


if __name__ == "__main__":
    main()
