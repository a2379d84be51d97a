"""Benchmark torchdens against SciPy and the vectorized copula fast path.

Generates comparison plots saved to benchmarks/ folder.
"""
import time
import json
import numpy as np
import torch
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from scipy import special, stats as sps
import torchdens as td


JOHNSON_PARAMS = (0.3, 1.2)
COPULA_RHO = 0.6

SAMPLE_SIZES = [100, 1_000, 10_000, 100_000, 1_000_000]
N_REPEATS = 5


def _time(fn, *args):
    fn(*args)  # warmup
    t0 = time.perf_counter()
    for _ in range(N_REPEATS):
        fn(*args)
    return (time.perf_counter() - t0) / N_REPEATS * 1000


def bench_unit_johnson_lpdf():
    """Benchmark unit_johnson_lpdf() against a scipy.stats.johnsonsu reference."""
    mu, sigma = JOHNSON_PARAMS

    def sp_lpdf(x):
        y = special.logit(x)
        return float(np.sum(sps.johnsonsu.logpdf(y, mu, sigma) - np.log(x) - np.log1p(-x)))

    sp_times = []
    td_times = []
    for n in SAMPLE_SIZES:
        rng = np.random.default_rng(42)
        x_np = rng.uniform(0.001, 0.999, n)
        x_th = torch.tensor(x_np, dtype=torch.float64)
        sp_times.append(_time(sp_lpdf, x_np))
        td_times.append(_time(td.unit_johnson_lpdf, x_th, mu, sigma))
    return {"sp": sp_times, "td": td_times, "sizes": SAMPLE_SIZES}


def bench_unit_johnson_rng():
    """Benchmark unit_johnson_rng() against scipy's inverse-CDF sampler."""
    mu, sigma = JOHNSON_PARAMS
    g = torch.Generator().manual_seed(0)
    rng = np.random.default_rng(0)

    sp_times = []
    td_times = []
    for n in SAMPLE_SIZES:
        sp_times.append(_time(lambda: special.expit(sps.johnsonsu.rvs(mu, sigma, size=n, random_state=rng))))
        td_times.append(_time(lambda: td.unit_johnson_rng(mu, sigma, size=n, generator=g, dtype=torch.float64)))
    return {"sp": sp_times, "td": td_times, "sizes": SAMPLE_SIZES}


def bench_normal_copula():
    """Benchmark normal_copula_vector() against summing normal_copula() elementwise."""
    elem_times = []
    vec_times = []
    for n in SAMPLE_SIZES:
        g = torch.Generator().manual_seed(42)
        u = torch.rand(n, generator=g, dtype=torch.float64)
        v = torch.rand(n, generator=g, dtype=torch.float64)
        elem_times.append(_time(lambda: td.normal_copula(u, v, COPULA_RHO).sum()))
        vec_times.append(_time(td.normal_copula_vector, u, v, COPULA_RHO))
    return {"elementwise": elem_times, "vector": vec_times, "sizes": SAMPLE_SIZES}


def plot_scaling(results, labels, title, path):
    fig, ax = plt.subplots(figsize=(7, 4.5))
    for key, label in labels.items():
        ax.loglog(results["sizes"], results[key], "o-", label=label)
    ax.set_xlabel("Sample Size")
    ax.set_ylabel("Time (ms)")
    ax.set_title(title)
    ax.grid(True, which="both", alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(path, dpi=120)
    plt.close(fig)
    print(f"  Saved: {path}")


def main():
    torch.set_num_threads(1)
    all_results = {}

    print("Running unit_johnson_lpdf benchmark...")
    res = bench_unit_johnson_lpdf()
    all_results["unit_johnson_lpdf"] = res
    plot_scaling(res, {"sp": "scipy", "td": "torchdens"},
                 "unit_johnson_lpdf() Speed Comparison",
                 "benchmarks/unit_johnson_lpdf_benchmark.png")

    print("Running unit_johnson_rng benchmark...")
    res = bench_unit_johnson_rng()
    all_results["unit_johnson_rng"] = res
    plot_scaling(res, {"sp": "scipy", "td": "torchdens"},
                 "unit_johnson_rng() Speed Comparison",
                 "benchmarks/unit_johnson_rng_benchmark.png")

    print("Running normal_copula benchmark...")
    res = bench_normal_copula()
    all_results["normal_copula"] = res
    plot_scaling(res, {"elementwise": "normal_copula().sum()", "vector": "normal_copula_vector()"},
                 "Gaussian copula: vectorized vs elementwise",
                 "benchmarks/normal_copula_benchmark.png")

    with open("benchmarks/results.json", "w") as f:
        json.dump(all_results, f, indent=2)
    print("  Saved: benchmarks/results.json")

    print("\nDone! All benchmark results saved to benchmarks/")


if __name__ == "__main__":
    main()
