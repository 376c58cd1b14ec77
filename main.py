# main.py
import argparse

from geolength.app.build import build
from geolength.app.report import report_lengths
from geolength.io.config import load_config, load_paths
from geolength.io.recorder import JsonlSink, Recorder


def run(paths_file: str, config_file: str | None = None, run_id: str = "local") -> int:
    cfg = load_config(config_file)
    app = build(cfg, run_id=run_id)

    recorder = Recorder(JsonlSink())
    records = report_lengths(load_paths(paths_file), app.geodesy, recorder)

    # non-zero exit when any path failed to converge
    return 1 if any(r.error for r in records) else 0


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Vincenty lengths of (lon, lat) paths, one JSON line per path.")
    ap.add_argument("paths", help='JSON file: {"paths": [[[lon, lat], ...], ...]}')
    ap.add_argument("--config", default=None, help="JSON geodesy config")
    ap.add_argument("--run-id", default="local")
    args = ap.parse_args()
    raise SystemExit(run(args.paths, args.config, args.run_id))
