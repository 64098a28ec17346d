#!/usr/bin/env python3
"""Start the okbench server and load it with wrk."""

import os
import shutil
import subprocess
import sys
import time


def wrk_command(url, threads=12, connections=400, duration="30s"):
    """Build the wrk command line."""
    return ["wrk", f"-t{threads}", f"-c{connections}", f"-d{duration}", url]


def bench_url(server_addr):
    """Local URL for a ``host:port`` or ``:port`` server address."""
    port = server_addr.rpartition(':')[2] or "4500"
    return f"http://127.0.0.1:{port}"


def main():
    """Run the benchmark against a freshly started server."""
    if shutil.which("wrk") is None:
        print("Error: wrk is not installed", file=sys.stderr)
        print("See https://github.com/wg/wrk", file=sys.stderr)
        sys.exit(1)

    url = bench_url(os.getenv("OKB_SERVER_ADDR", ":4500"))
    print(f"start benching {url}")

    server = subprocess.Popen([sys.executable, "-m", "python_okbench.main"])
    try:
        time.sleep(1)
        if server.poll() is not None:
            print(f"Error: server exited with status {server.returncode}", file=sys.stderr)
            sys.exit(1)
        subprocess.call(wrk_command(url))
    finally:
        if server.poll() is None:
            server.terminate()
            server.wait()


if __name__ == "__main__":
    main()
