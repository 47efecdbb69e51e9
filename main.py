# main.py
import sys

from claim_sim.app.build import build
from claim_sim.io.claims import MemoryClaimSink, build_claim_record


def run(horizon_s: float = 3600.0):
    cfg = {
        "name": "square_walk",
        "run_id": "demo-1",
        "sim": {"epoch": [2025, 1, 1, 8, 0, 0], "seed": 7, "duration": int(horizon_s)},
        "tracking": {"tick_interval_s": 2.0},
        # 150 m square walked at 5 km/h, a fix every 10 s with ~1 m of GPS noise
        "walk": {"speed_kmh": 5.0, "fix_interval_s": 10.0, "jitter_m": 1.0},
    }
    app = build(cfg)
    snap = app.run()

    verdict = snap.verdict
    if verdict is None:
        print(f"session ended in {snap.state.value} ({snap.abort_reason})", file=sys.stderr)
        return 1
    if not verdict.valid:
        print(f"claim rejected: {verdict.reason.message}", file=sys.stderr)
        return 1

    sink = MemoryClaimSink()
    sink.save(build_claim_record(snap, clock=app.clock))
    print(sink.records[-1].model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(run())
