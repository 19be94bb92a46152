"""Tabular catalog of the registered conformance cases."""

import pandas as pd

from gpio_conformance.scenarios.registry import list_registered
import gpio_conformance.scenarios  # noqa: F401

CATALOG_COLUMNS = ["case_id", "name", "modes", "steps", "verifications", "description"]


def scenario_catalog() -> pd.DataFrame:
    """One row per registered case, sorted by case id."""
    df = pd.DataFrame(list_registered(), columns=CATALOG_COLUMNS)
    return df.sort_values("case_id").reset_index(drop=True)


def format_catalog(df: pd.DataFrame = None) -> str:
    if df is None:
        df = scenario_catalog()
    summary = (
        f"\n{len(df)} cases, {int(df['verifications'].sum())} verifications, "
        f"{int((df['modes'] == 's').sum())} single-line only"
    )
    return df.to_string(index=False) + summary
