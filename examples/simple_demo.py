#!/usr/bin/env python3
"""
Simple demo of random line access with linegetter.

Writes a log file with JSON events, indexes it once, then reads lines
out of order, including one that exceeds the maximum line length.
"""

import json
import tempfile
import time
from pathlib import Path

from linegetter import LineGetterConfig, build
from linegetter.utils.logging import configure_logging


def main():
    configure_logging(log_level="INFO", log_format="console")

    print("=" * 60)
    print("linegetter - Random Line Access Demo")
    print("=" * 60)

    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "events.log"

        print("\n[1] Writing 100000 events...")
        with open(path, "w") as f:
            for i in range(100000):
                event = {"id": i, "timestamp": int(time.time()), "data": f"event #{i}"}
                f.write(json.dumps(event) + "\n")
            f.write("x" * 300 + "\n")
        print(f"✅ Wrote {path.stat().st_size} bytes")

        with open(path, "rb") as stream:
            print("\n[2] Indexing...")
            getter = build(stream, config=LineGetterConfig(max_line_length=256))
            print(f"✅ {getter.count()} lines indexed")

            print("\n[3] Reading lines out of order...")
            for line_number in (99999, 1, 50000):
                result = getter.get_line(line_number)
                print(f"  line {line_number}: {result.text}")

            print("\n[4] Reading an over-long line...")
            result = getter.get_line(100001)
            print(f"  truncated={result.truncated} length={len(result.content)}")
            print(f"  signal: {result.error}")


if __name__ == "__main__":
    main()
