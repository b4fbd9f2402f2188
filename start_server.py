#!/usr/bin/env python3
"""Start script that launches the API under uvicorn, honouring the PORT environment variable."""

import os
import sys
import subprocess

port = os.environ.get("PORT", "8000")

try:
    port_int = int(port)
except ValueError:
    print(f"Warning: Invalid PORT value '{port}', using default 8000", file=sys.stderr)
    port_int = 8000

src_path = os.path.abspath("src")
if not os.path.isdir(src_path):
    print(f"Warning: src directory not found at {src_path}", file=sys.stderr)
    src_path = os.getcwd()

pythonpath = os.environ.get("PYTHONPATH", "")
os.environ["PYTHONPATH"] = f"{src_path}{os.pathsep}{pythonpath}" if pythonpath else src_path
sys.path.insert(0, src_path)

cmd = [
    sys.executable,
    "-m",
    "uvicorn",
    "treasure_router.main:app",
    "--host",
    "0.0.0.0",
    "--port",
    str(port_int),
    "--proxy-headers",
    "--forwarded-allow-ips", "*",
]

print(f"Starting server on port {port_int}...", file=sys.stderr)
print(f"PYTHONPATH={os.environ['PYTHONPATH']}", file=sys.stderr)

# Fail early if settings or the region catalog cannot be loaded
try:
    import treasure_router.main  # noqa: F401
    from treasure_router.services.routing.service import get_route_optimizer

    optimizer = get_route_optimizer()
    print(
        f"Loaded {len(optimizer.catalog)} regions, map order policy '{optimizer.map_order_policy}'",
        file=sys.stderr,
    )
except Exception as e:
    print(f"Failed to import treasure_router.main: {e}", file=sys.stderr)
    import traceback
    traceback.print_exc(file=sys.stderr)
    sys.exit(1)

try:
    result = subprocess.call(cmd)
    if result != 0:
        print(f"Uvicorn exited with code {result}", file=sys.stderr)
    sys.exit(result)
except KeyboardInterrupt:
    print("Server interrupted by user", file=sys.stderr)
    sys.exit(0)
