# src/places_service.py
from __future__ import annotations

from typing import Optional

import pandas as pd
import streamlit as st

from core.airlines import AIRLINES
from core.routes import PLACES


@st.cache_data(show_spinner=False)
def get_places_df() -> pd.DataFrame:
    """
    Returns a dataframe with columns:
      - value  (route identifier, e.g. "chiang-mai")
      - label  (Thai display name shown in the form)
    """
    df = pd.DataFrame(PLACES, columns=["value", "label"])
    df["option"] = df["label"] + " (" + df["value"] + ")"
    return df


@st.cache_data(show_spinner=False)
def get_airlines_df() -> pd.DataFrame:
    return pd.DataFrame(AIRLINES, columns=["value", "label"])


def value_from_option(option: Optional[str]) -> Optional[str]:
    if not option:
        return None
    # option format: "เชียงใหม่ (chiang-mai)"
    return option.rsplit("(", 1)[-1].rstrip(")").strip()
