"""Benchmark Gauss-Hermite expansion construction.

Times the full constructor (moments, envelope fit and projection) against
the projection alone for a fixed envelope, across expansion orders, and
the B-spline transform matrix across grid sizes.
"""

import time

import torch

from torchgh.gauss_hermite import (
    FitOrder,
    gauss_hermite_coefficients,
    gauss_hermite_expansion,
    gauss_hermite_matrix,
)


def skewed_gaussian(x: torch.Tensor) -> torch.Tensor:
    y = (x - 0.4) / 1.3
    return torch.exp(-0.5 * y * y) * (1 + 0.1 * torch.tanh(y))


def benchmark(fn, n_iterations: int = 20, device: str = "cpu") -> float:
    """Average time of ``fn()`` in milliseconds."""
    # Warmup
    for _ in range(3):
        _ = fn()

    if device == "cuda":
        torch.cuda.synchronize()

    start = time.perf_counter()
    for _ in range(n_iterations):
        _ = fn()

    if device == "cuda":
        torch.cuda.synchronize()

    elapsed = time.perf_counter() - start
    return elapsed / n_iterations * 1000  # ms


def main():
    """Run expansion benchmarks across orders and grid sizes."""
    orders = [2, 4, 8, 16, 32]

    print("Gauss-Hermite Expansion Benchmark")
    print("=" * 70)
    print(
        f"{'Order':>8} {'Envelope (ms)':>16} {'Full (ms)':>14} "
        f"{'Project (ms)':>14}"
    )
    print("-" * 70)

    for order in orders:
        ms_envelope = benchmark(
            lambda: gauss_hermite_expansion(skewed_gaussian, order)
        )
        ms_full = benchmark(
            lambda: gauss_hermite_expansion(
                skewed_gaussian, order, fit_order=FitOrder.FULL
            )
        )
        ms_project = benchmark(
            lambda: gauss_hermite_coefficients(
                skewed_gaussian, order, 1.0, 0.4, 1.3
            ),
            n_iterations=200,
        )

        print(
            f"{order:>8} {ms_envelope:>16.4f} {ms_full:>14.4f} "
            f"{ms_project:>14.4f}"
        )

    print()
    print(f"{'Grid size':>10} {'Degree 1 (ms)':>16} {'Degree 3 (ms)':>16}")
    print("-" * 70)

    for size in [16, 64, 256, 1024]:
        grid = torch.linspace(-6.0, 6.0, size, dtype=torch.float64)

        ms_linear = benchmark(
            lambda: gauss_hermite_matrix(1, grid, 8, 1.0, 0.0, 1.5)
        )
        ms_cubic = benchmark(
            lambda: gauss_hermite_matrix(3, grid, 8, 1.0, 0.0, 1.5)
        )

        print(f"{size:>10} {ms_linear:>16.4f} {ms_cubic:>16.4f}")

    print()
    print("Notes:")
    print("- Envelope fits amplitude, center and width only")
    print("- Full also fits h_3..h_order, so its cost grows with the order")
    print("- Project is the fixed-envelope projection on the 1/7 node grid")


if __name__ == "__main__":
    main()
