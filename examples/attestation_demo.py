"""
Example: Attested PageRank

This example demonstrates:
- Ranking the built-in graph and producing the canonical result string
- Running the Delta/Sigma chain under every registered scheme
- Re-verifying a recorded run from its JSONL entry
- Detecting a tampered result
- Reading the attestation metrics
"""

import sys
import os

# Add parent directory to path so we can import rankattest
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from rankattest.attestation import AttestationStatus, CryptoContext, rs_hex
from rankattest.config import RunConfig
from rankattest.graph import default_graph
from rankattest.service import RunEntry, render_report, run_schemes, verify_run_entry


def main():
    print("📈 Attested PageRank Demo")
    print("=" * 50)

    context = CryptoContext()
    schemes = context.registry.ids()

    print(f"\n1. Ranking the default graph under {len(schemes)} schemes...")
    results = run_schemes(RunConfig(), schemes, default_graph, context)

    for scheme, result in results.items():
        record = result.attestation
        marker = "✅" if record.trusted else ("⚠️" if record.status is AttestationStatus.DEGRADED else "❌")
        print(f"   {marker} {scheme:<11} {record.status.value}")
        if record.error:
            print(f"      reason: {record.error}")

    result = results["ecdsa-r1"]
    print("\n2. Report for ecdsa-r1:")
    for line in render_report(result):
        print(f"   {line}")

    r_hex, s_hex = rs_hex(result.attestation.delta_signature)
    print("\n3. Delta signature as (r, s):")
    print(f"   r = {r_hex}")
    print(f"   s = {s_hex}")

    print("\n4. Re-verifying the recorded run...")
    entry = RunEntry.from_result(result)
    outcome = verify_run_entry(entry)
    if outcome.valid:
        print("   ✅ Both signatures verify with the recorded keys")
    else:
        print(f"   ❌ Verification failed: {outcome.errors}")
        return

    print("\n5. Tampering with the result...")
    forged = RunEntry.from_dict(dict(entry.to_dict(), data="PageA:1.0000;"))
    outcome = verify_run_entry(forged)
    if outcome.valid:
        print("   ❌ Tampered result was accepted!")
    else:
        print(f"   ✅ Tampering detected: {', '.join(outcome.errors)}")

    print("\n6. Attestation Metrics:")
    for name, value in context.metrics.snapshot().items():
        print(f"   {name}: {value}")

    print("\n🎉 Demo completed!")


if __name__ == "__main__":
    main()
