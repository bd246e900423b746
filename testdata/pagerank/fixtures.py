"""
Regression baseline fixtures for the PageRank engine.

This script regenerates the canonical result string of the default graph
(100 iterations, damping 0.85) and its SHA-256 digest. The files next to it
are the pinned baseline that the test suite compares against.
"""

import json
import os
import sys
import time

# Add parent directories to path so we can import rankattest
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from rankattest.attestation import sha256_hex
from rankattest.graph import default_graph
from rankattest.pagerank import PageRankEngine, format_result

ITERATIONS = 100
DAMPING = 0.85


def baseline_result() -> str:
    """Return the canonical result string of the default graph."""
    graph = default_graph()
    PageRankEngine().run(graph, ITERATIONS, DAMPING)
    return format_result(graph.get_all_nodes())


def main():
    """Write canonical.txt, digest.txt and summary.json."""
    result = baseline_result()
    result_digest = sha256_hex(result.encode("utf-8"))

    out_dir = os.path.dirname(os.path.abspath(__file__))

    with open(os.path.join(out_dir, "canonical.txt"), "w") as f:
        f.write(result)

    with open(os.path.join(out_dir, "digest.txt"), "w") as f:
        f.write(result_digest)

    summary = {
        "iterations": ITERATIONS,
        "damping_factor": DAMPING,
        "result": result,
        "digest": result_digest,
        "generated_at": int(time.time()),
        "python_version": sys.version.split()[0],
    }
    with open(os.path.join(out_dir, "summary.json"), "w") as f:
        json.dump(summary, f, indent=2, sort_keys=True)

    print(f"Result: {result}")
    print(f"Digest: {result_digest}")


if __name__ == "__main__":
    main()
