"""Top‑level package for the Finance Tracker.

The primary modules are:

* ``aggregation`` – totals, monthly comparisons, daily series and category
  breakdowns derived from transactions
* ``goals`` – the goal lifecycle (create, pin, achieve, mark as spending)
* ``storage`` – JSON-file collections that never raise to callers
* ``rates`` – exchange-rate lookup with a static fallback
* ``visualization`` – functions that generate Plotly figures

To run the app from the command line you can execute:

```bash
streamlit run finance_tracker/Home.py
```

or use ``run_dashboard.py`` at the project root.
"""

from . import aggregation  # noqa: F401  # re-exported for convenience
from . import goals  # noqa: F401  # re-exported for convenience

__all__ = ["aggregation", "goals"]
