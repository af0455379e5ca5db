import csv
import os

import plot
from benchmark import CSV_HEADER


def test_plot_results(tmp_path):
    csv_path = tmp_path / "conformance.csv"
    with open(csv_path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        writer.writerow(["sat", "a.dimacs", "SATISFIABLE", "SATISFIABLE", "OK",
                         "0.010000", "1.00", "2.00", "3.00", 4])
        writer.writerow(["unsat", "b.dimacs", "UNSATISFIABLE", "UNSATISFIABLE", "OK",
                         "0.200000", "5.00", "6.00", "7.00", 12])
        writer.writerow(["unsat", "c.dimacs", "UNSATISFIABLE", "-", "TIMEOUT",
                         "1.000000", "0.00", "0.00", "0.00", 0])

    saved = plot.plot_results(csv_path, str(tmp_path / "charts"))
    names = {os.path.basename(path) for path in saved}
    assert names == {"time_log.png", "memory_log.png", "decisions_log.png", "status_counts.png"}
    assert all(os.path.getsize(path) > 0 for path in saved)
