#!/usr/bin/env python3
"""
Example: Fusing quantum and classical pipeline outputs

Simulates a noisy quantum estimate of a slow trend alongside a coarser
classical estimate of the same trend, then merges them.
"""

import argparse
import json
import logging

import numpy as np

from qcfusion import FusionConfig, FusionEngine


def simulate(n_quantum: int, n_classical: int, seed: int):
    """Two noisy views of the same underlying trend."""
    rng = np.random.default_rng(seed)
    t_q = np.linspace(0.0, 1.0, n_quantum)
    t_c = np.linspace(0.0, 1.0, n_classical)
    quantum = 0.5 * np.sin(2 * np.pi * t_q) + rng.normal(scale=0.05, size=n_quantum)
    classical = 0.5 * np.sin(2 * np.pi * t_c) + rng.normal(scale=0.1, size=n_classical)
    return quantum, classical


def main():
    parser = argparse.ArgumentParser(description="qcfusion example")
    parser.add_argument("--n-quantum", type=int, default=64)
    parser.add_argument("--n-classical", type=int, default=16)
    parser.add_argument("--seed", type=int, default=7)
    parser.add_argument("--json", action="store_true", help="Print full result as JSON")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    quantum, classical = simulate(args.n_quantum, args.n_classical, args.seed)

    engine = FusionEngine(FusionConfig.from_env())
    result = engine.merge(quantum, classical)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return

    metrics = result.quality_metrics
    print("=" * 60)
    print("qcfusion: quantum/classical fusion")
    print("=" * 60)
    print(f"Aligned length:       {result.metadata.aligned_length}")
    print(f"Quantum confidence:   {metrics.quantum_confidence:.3f} (weight {result.quantum_weight:.2f})")
    print(f"Classical confidence: {metrics.classical_confidence:.3f} (weight {result.classical_weight:.2f})")
    print(f"Alignment score:      {result.alignment_score:.3f}")
    print(f"Correlation:          {metrics.correlation_coefficient:+.3f}")
    print(f"Convergence:          {metrics.convergence_score:.3f}")
    print(f"Overall confidence:   {result.confidence_level:.3f} [{result.quality.value.upper()}]")
    print(f"Processing time:      {result.metadata.processing_time * 1000:.2f} ms")
    for warning in result.warnings:
        print(f"  ! {warning}")


if __name__ == "__main__":
    main()
