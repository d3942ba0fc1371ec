"""
Hash Table Demo -- Basic operations, resize timeline, chain length distribution,
amortized insertion cost, and worst-case collision behavior.

Generates:
- viz/*.png -- Individual visualization files
- report.pdf -- Comprehensive PDF report
"""

import sys
import time
from math import factorial
from pathlib import Path

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))
from hash_table import HashTable, bucket_index, INITIAL_CAPACITY, LOAD_FACTOR_THRESHOLD

SEED = 42
np.random.seed(SEED)

VIZ_DIR = Path(__file__).parent / "viz"
VIZ_DIR.mkdir(exist_ok=True)

COLORS = {
    "blue": "#3498db",
    "red": "#e74c3c",
    "orange": "#f39c12",
    "green": "#27ae60",
    "purple": "#9b59b6",
    "steel": "steelblue",
    "dark": "#2c3e50",
}


class ConstantHashKey:
    def __init__(self, value):
        self.value = value

    def __hash__(self):
        return 7

    def __eq__(self, other):
        return isinstance(other, ConstantHashKey) and self.value == other.value


def _random_keys(n):
    return [f"user-{k}" for k in np.random.permutation(n * 1000)[:n]]


def _average_probes(lengths):
    """Expected entries examined by a successful lookup."""
    lengths = np.asarray(lengths, dtype=float)
    total = lengths.sum()
    if total == 0:
        return 0.0
    return float((lengths * (lengths + 1) / 2).sum() / total)


# ---------------------------------------------------------------------------
# Example 1: Basic Operations
# ---------------------------------------------------------------------------
def example_1_basic_operations():
    """Walk through put/get/remove/contains and show the bucket layout."""
    print("=" * 60)
    print("Example 1: Basic Operations")
    print("=" * 60)

    table = HashTable()
    print(f"\n  Empty table: size={table.size()}, is_empty={table.is_empty()}, "
          f"get('x')={table.get('x')}")

    table.put("a", 1)
    table.put("a", 2)
    print(f"  put('a', 1); put('a', 2) -> get('a')={table.get('a')}, size={table.size()}")
    assert table.get("a") == 2 and table.size() == 1

    fruits = ["apple", "banana", "cherry", "date", "elderberry", "fig",
              "grape", "honeydew", "kiwi", "lemon"]
    for i, name in enumerate(fruits):
        table.put(name, i)
    print(f"  Inserted {len(fruits)} fruits -> size={table.size()}, "
          f"capacity={table.capacity()}, load={table.load_factor():.3f}")

    removed = table.remove("banana")
    missing = table.remove("banana")
    print(f"  remove('banana') -> {removed}, second remove -> {missing}")
    print(f"  contains('cherry')={table.contains('cherry')}, "
          f"contains('banana')={table.contains('banana')}")
    assert missing is None and not table.contains("banana")

    lengths = table.chain_lengths()
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    axes[0].bar(range(len(lengths)), lengths, color=COLORS["blue"], edgecolor="white")
    axes[0].set_xlabel("Bucket index")
    axes[0].set_ylabel("Chain length")
    axes[0].set_title(f"Bucket Occupancy (capacity={table.capacity()}, size={table.size()})",
                      fontsize=10, fontweight="bold")
    axes[0].grid(True, alpha=0.3, axis="y")

    axes[1].axis("off")
    layout_lines = []
    for index, head_len in enumerate(lengths):
        if head_len == 0:
            continue
        chain = [k for k in table.keys() if bucket_index(k, table.capacity()) == index]
        layout_lines.append(f"[{index:2d}] " + " -> ".join(chain))
    axes[1].text(0.02, 0.98, "\n".join(layout_lines), fontsize=9, ha="left", va="top",
                 family="monospace", transform=axes[1].transAxes,
                 bbox=dict(boxstyle="round,pad=0.5", facecolor="lightyellow", alpha=0.9))
    axes[1].set_title("Chains by Bucket", fontsize=10, fontweight="bold")

    fig.suptitle("Hash Table: Basic Operations", fontsize=14, fontweight="bold", y=1.0)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "01_basic_operations.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"\n  Saved: viz/01_basic_operations.png")


# ---------------------------------------------------------------------------
# Example 2: Resize Timeline
# ---------------------------------------------------------------------------
def example_2_resize_timeline():
    """Track capacity and load factor as entries are inserted."""
    print("\n" + "=" * 60)
    print("Example 2: Resize Timeline")
    print("=" * 60)

    n = 800
    keys = _random_keys(n)
    table = HashTable()
    capacities = []
    loads = []
    resize_points = []
    for i, key in enumerate(keys, start=1):
        before = table.capacity()
        table.put(key, i)
        capacities.append(table.capacity())
        loads.append(table.load_factor())
        if table.capacity() != before:
            resize_points.append((i, before, table.capacity()))

    for i, old, new in resize_points:
        print(f"  insert #{i:4d}: capacity {old:4d} -> {new:4d}")
    assert resize_points[0] == (12, 16, 32)
    assert max(loads) < LOAD_FACTOR_THRESHOLD

    x = np.arange(1, n + 1)
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    axes[0].step(x, capacities, where="post", color=COLORS["purple"], linewidth=2)
    axes[0].plot(x, x / LOAD_FACTOR_THRESHOLD, "--", color=COLORS["orange"],
                 label="size / 0.75")
    axes[0].set_yscale("log", base=2)
    axes[0].set_xlabel("Entries inserted")
    axes[0].set_ylabel("Capacity (log2)")
    axes[0].set_title("Capacity Doubles at the Load Threshold", fontsize=10, fontweight="bold")
    axes[0].legend(fontsize=9)
    axes[0].grid(True, alpha=0.3)

    axes[1].plot(x, loads, color=COLORS["blue"], linewidth=1.5)
    axes[1].axhline(LOAD_FACTOR_THRESHOLD, color=COLORS["red"], linestyle="--",
                    label=f"threshold = {LOAD_FACTOR_THRESHOLD}")
    for i, _, _ in resize_points:
        axes[1].axvline(i, color="gray", alpha=0.3, linewidth=0.8)
    axes[1].set_xlabel("Entries inserted")
    axes[1].set_ylabel("Load factor")
    axes[1].set_title("Sawtooth Load Factor\nDrops to ~0.375 after each resize",
                      fontsize=10, fontweight="bold")
    axes[1].legend(fontsize=9)
    axes[1].grid(True, alpha=0.3)

    fig.suptitle("Hash Table: Resize Timeline", fontsize=14, fontweight="bold", y=1.02)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "02_resize_timeline.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"\n  Saved: viz/02_resize_timeline.png")


# ---------------------------------------------------------------------------
# Example 3: Chain Length Distribution
# ---------------------------------------------------------------------------
def example_3_chain_distribution():
    """Compare observed chain lengths against the Poisson model of uniform hashing."""
    print("\n" + "=" * 60)
    print("Example 3: Chain Length Distribution")
    print("=" * 60)

    fig, axes = plt.subplots(1, 3, figsize=(18, 5))
    for ax, n in zip(axes, [190, 380, 760]):
        table = HashTable()
        for i, key in enumerate(_random_keys(n)):
            table.put(key, i)
        lengths = np.array(table.chain_lengths())
        lam = table.load_factor()
        counts = np.bincount(lengths)
        ks = np.arange(max(len(counts), 6))
        expected = np.array([np.exp(-lam) * lam ** k / factorial(k) for k in ks]) * table.capacity()

        print(f"\n  n={n}: capacity={table.capacity()}, load={lam:.3f}, "
              f"longest chain={lengths.max()}, empty buckets={counts[0]}")
        print(f"    average probes (hit): {_average_probes(lengths):.3f} "
              f"(theory 1 + load/2 = {1 + lam / 2:.3f})")

        ax.bar(np.arange(len(counts)) - 0.2, counts, 0.4, color=COLORS["steel"],
               edgecolor="white", label="Observed")
        ax.bar(ks + 0.2, expected, 0.4, color=COLORS["orange"], edgecolor="white",
               label=r"Poisson($\lambda$)")
        ax.set_xlabel("Chain length")
        ax.set_ylabel("Number of buckets")
        ax.set_title(f"n={n}, capacity={table.capacity()}, $\\lambda$={lam:.2f}",
                     fontsize=10, fontweight="bold")
        ax.legend(fontsize=9)
        ax.grid(True, alpha=0.3, axis="y")

    fig.suptitle("Hash Table: Chain Lengths Follow Poisson(load factor)",
                 fontsize=14, fontweight="bold", y=1.02)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "03_chain_distribution.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"\n  Saved: viz/03_chain_distribution.png")


# ---------------------------------------------------------------------------
# Example 4: Amortized Insertion Cost
# ---------------------------------------------------------------------------
def example_4_amortized_cost():
    """Count entry moves caused by rehashing and time individual inserts."""
    print("\n" + "=" * 60)
    print("Example 4: Amortized Insertion Cost")
    print("=" * 60)

    n = 20000
    keys = list(range(n))
    table = HashTable()
    work = np.zeros(n)
    latency = np.zeros(n)
    for i, key in enumerate(keys):
        before = table.capacity()
        start = time.perf_counter()
        table.put(key, key)
        latency[i] = time.perf_counter() - start
        work[i] = 1 + (table.size() if table.capacity() != before else 0)

    amortized = np.cumsum(work) / np.arange(1, n + 1)
    print(f"\n  Inserted {n} keys, final capacity {table.capacity()}")
    print(f"  Total entry writes: {int(work.sum())} ({work.sum() / n:.2f} per insert)")
    print(f"  Max single insert: {int(work.max())} writes, "
          f"{latency.max() * 1e3:.2f} ms")
    print(f"  Median insert latency: {np.median(latency) * 1e6:.2f} us")
    assert amortized[-1] < 3.0

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    x = np.arange(1, n + 1)

    axes[0].plot(x, work, color=COLORS["red"], linewidth=0.8, label="Per-insert writes")
    axes[0].plot(x, amortized, color=COLORS["green"], linewidth=2, label="Running average")
    axes[0].set_yscale("log")
    axes[0].set_xlabel("Insert number")
    axes[0].set_ylabel("Entry writes")
    axes[0].set_title("Rare O(n) Spikes, O(1) Average", fontsize=10, fontweight="bold")
    axes[0].legend(fontsize=9)
    axes[0].grid(True, alpha=0.3)

    axes[1].plot(x, np.cumsum(latency) * 1e3, color=COLORS["blue"], linewidth=2)
    axes[1].set_xlabel("Insert number")
    axes[1].set_ylabel("Cumulative time (ms)")
    axes[1].set_title("Cumulative Insert Time Grows Linearly", fontsize=10, fontweight="bold")
    axes[1].grid(True, alpha=0.3)

    fig.suptitle("Hash Table: Amortized Insertion Cost", fontsize=14, fontweight="bold", y=1.02)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "04_amortized_cost.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"\n  Saved: viz/04_amortized_cost.png")


# ---------------------------------------------------------------------------
# Example 5: Worst-Case Collisions
# ---------------------------------------------------------------------------
def example_5_collisions():
    """Keys sharing one hash degrade every chain walk to O(n)."""
    print("\n" + "=" * 60)
    print("Example 5: Worst-Case Collisions")
    print("=" * 60)

    sizes = [50, 100, 200, 400, 800]
    good_times = []
    bad_times = []
    bad_probes = []
    for n in sizes:
        good = HashTable()
        bad = HashTable()
        for i in range(n):
            good.put(i, i)
            bad.put(ConstantHashKey(i), i)
        assert max(bad.chain_lengths()) == n

        start = time.perf_counter()
        for i in range(n):
            good.get(i)
        good_times.append((time.perf_counter() - start) / n)

        start = time.perf_counter()
        for i in range(n):
            bad.get(ConstantHashKey(i))
        bad_times.append((time.perf_counter() - start) / n)
        bad_probes.append(_average_probes(bad.chain_lengths()))

        print(f"  n={n:4d}: uniform {good_times[-1] * 1e6:8.2f} us/get, "
              f"colliding {bad_times[-1] * 1e6:8.2f} us/get "
              f"(avg probes {bad_probes[-1]:.1f})")

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    axes[0].plot(sizes, np.array(good_times) * 1e6, "o-", color=COLORS["green"],
                 linewidth=2, label="Distinct hashes")
    axes[0].plot(sizes, np.array(bad_times) * 1e6, "s-", color=COLORS["red"],
                 linewidth=2, label="Constant hash")
    axes[0].set_xlabel("Entries")
    axes[0].set_ylabel("Mean get latency (us)")
    axes[0].set_title("Lookup Latency", fontsize=10, fontweight="bold")
    axes[0].legend(fontsize=9)
    axes[0].grid(True, alpha=0.3)

    axes[1].plot(sizes, bad_probes, "s-", color=COLORS["red"], linewidth=2,
                 label="Observed")
    axes[1].plot(sizes, (np.array(sizes) + 1) / 2, "--", color=COLORS["dark"],
                 label="(n + 1) / 2")
    axes[1].set_xlabel("Entries")
    axes[1].set_ylabel("Average probes per hit")
    axes[1].set_title("One Chain Holds Everything", fontsize=10, fontweight="bold")
    axes[1].legend(fontsize=9)
    axes[1].grid(True, alpha=0.3)

    fig.suptitle("Hash Table: Worst-Case Collisions", fontsize=14, fontweight="bold", y=1.02)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "05_collisions.png", dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"\n  Saved: viz/05_collisions.png")


# ---------------------------------------------------------------------------
# PDF Report
# ---------------------------------------------------------------------------
def generate_pdf_report():
    """Generate PDF report with a title page, the math, and every visualization."""
    print("\n" + "=" * 60)
    print("Generating PDF Report")
    print("=" * 60)

    report_path = Path(__file__).parent / "report.pdf"
    viz_files = sorted(VIZ_DIR.glob("*.png"))

    with PdfPages(str(report_path)) as pdf:
        fig, ax = plt.subplots(figsize=(11, 8.5))
        ax.axis("off")
        ax.text(0.5, 0.78, "Hash Table", fontsize=28, fontweight="bold",
                ha="center", va="center", transform=ax.transAxes)
        ax.text(0.5, 0.68, "Separate Chaining with Doubling Resize",
                fontsize=13, ha="center", va="center", transform=ax.transAxes, color="gray")
        info_text = (
            "Keys hash into an array of buckets; colliding keys form a linked chain.\n"
            "When entries / buckets reaches the load threshold the array doubles\n"
            "and every entry is rehashed into it.\n\n"
            "This demo covers:\n"
            "  1. Basic operations and bucket layout\n"
            "  2. Resize timeline and the sawtooth load factor\n"
            "  3. Chain length distribution vs Poisson\n"
            "  4. Amortized insertion cost\n"
            "  5. Worst-case collisions\n\n"
            f"Initial capacity: {INITIAL_CAPACITY}, load threshold: {LOAD_FACTOR_THRESHOLD}\n"
            f"Random seed: {SEED}\n"
            f"Number of visualizations: {len(viz_files)}"
        )
        ax.text(0.5, 0.30, info_text, fontsize=11, ha="center", va="center",
                transform=ax.transAxes, linespacing=1.6)
        ax.text(0.5, 0.06, "Generated by demo.py", fontsize=10, ha="center",
                va="center", transform=ax.transAxes, style="italic", color="gray")
        pdf.savefig(fig)
        plt.close(fig)

        fig, ax = plt.subplots(figsize=(11, 8.5))
        ax.axis("off")
        ax.text(0.5, 0.96, "Mathematical Foundation", fontsize=20, fontweight="bold",
                ha="center", va="top", transform=ax.transAxes)
        lines = [
            ("Bucket index", r"$i(k) = (h(k) \;\&\; \mathtt{0x7FFFFFFF}) \bmod m$"),
            ("Load factor", r"$\alpha = n / m, \quad$ resize when $\alpha \geq 0.75$"),
            ("Chain length (uniform hashing)", r"$P(L = j) \approx e^{-\alpha}\alpha^j / j!$"),
            ("Expected probes", r"hit: $1 + \alpha/2, \quad$ miss: $\alpha$"),
            ("Amortized cost", r"$\sum_{j} m_0 2^j \cdot 0.75 \leq 2n \;\Rightarrow\; O(1)$ per insert"),
        ]
        y = 0.84
        for heading, formula in lines:
            ax.text(0.05, y, heading, fontsize=13, fontweight="bold", transform=ax.transAxes)
            y -= 0.05
            ax.text(0.10, y, formula, fontsize=12, transform=ax.transAxes)
            y -= 0.09
        pdf.savefig(fig)
        plt.close(fig)

        titles = {
            "01_basic_operations.png": "Example 1: Basic Operations",
            "02_resize_timeline.png": "Example 2: Resize Timeline",
            "03_chain_distribution.png": "Example 3: Chain Length Distribution",
            "04_amortized_cost.png": "Example 4: Amortized Insertion Cost",
            "05_collisions.png": "Example 5: Worst-Case Collisions",
        }

        for viz_file in viz_files:
            fig = plt.figure(figsize=(11, 8.5))
            title = titles.get(viz_file.name, viz_file.stem.replace("_", " ").title())
            fig.suptitle(title, fontsize=14, fontweight="bold", y=0.98)

            img = plt.imread(str(viz_file))
            ax = fig.add_axes([0.02, 0.02, 0.96, 0.92])
            ax.imshow(img)
            ax.axis("off")

            pdf.savefig(fig)
            plt.close(fig)

    print(f"  Report saved: report.pdf ({len(viz_files) + 2} pages)")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
def main():
    print("Hash Table Demo")
    print("=" * 60)
    print(f"Seed: {SEED}")
    print(f"Initial capacity: {INITIAL_CAPACITY}, load threshold: {LOAD_FACTOR_THRESHOLD}")
    print()

    example_1_basic_operations()
    example_2_resize_timeline()
    example_3_chain_distribution()
    example_4_amortized_cost()
    example_5_collisions()
    generate_pdf_report()

    print("\n" + "=" * 60)
    print("All examples completed successfully.")
    print(f"Visualizations: {VIZ_DIR}/")
    print(f"Report: {Path(__file__).parent / 'report.pdf'}")
    print("=" * 60)


if __name__ == "__main__":
    main()
