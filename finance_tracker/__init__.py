"""Top-level package for the Finance Tracker.

The primary modules are:

* ``analytics`` – totals, category breakdowns, burn rate, runway and trend
* ``filters`` – search, filter and sort of the transaction list
* ``goals`` – savings goal progress and completion forecast
* ``charts`` / ``visualization`` – chart series and their Plotly figures
* ``mutations`` – validated add, edit and delete operations
* ``store`` – JSON-backed record store
* ``dashboard`` – a Streamlit app that ties everything together

To run the dashboard from the command line you can execute:

```bash
streamlit run finance_tracker/dashboard.py
```
"""

from . import analytics  # noqa: F401  # re-exported for convenience
from . import charts  # noqa: F401  # re-exported for convenience
from . import filters  # noqa: F401  # re-exported for convenience
from . import goals  # noqa: F401  # re-exported for convenience
from . import mutations  # noqa: F401  # re-exported for convenience
from .analytics import TransactionAnalytics
from .models import Goal, TransactionRecord, ValidationError


__all__ = [
    "analytics",
    "charts",
    "filters",
    "goals",
    "mutations",
    "TransactionAnalytics",
    "Goal",
    "TransactionRecord",
    "ValidationError",
]
