from typing import Any, Callable, Optional

import streamlit as st
from streamlit_searchbox import st_searchbox


def header_with_progress(answered: int, total: int):
    """
    Renders the top-right progress indicator like 'Respondidas (1/5)'.
    """
    cols = st.columns([1, 5, 1])
    with cols[2]:
        st.markdown(f"**Respondidas ({answered}/{total})**", unsafe_allow_html=True)


def create_searchbox(
    label: str,
    placeholder: str,
    key: str,
    data: list,
    display_fn: Callable[[Any], str] = lambda x: str(x),
    return_fn: Callable[[Any], Any] = lambda x: x,
    default: Optional[Any] = None,
) -> Any:
    """
    Creates a Streamlit searchbox for selecting an item from data.

    :param label: Label for the searchbox
    :param placeholder: Placeholder text
    :param key: Unique key for Streamlit widget
    :param data: List of items
    :param display_fn: Function to format display text (default: str)
    :param return_fn: Function to extract return value (default: identity)
    :param default: Value returned while nothing is selected
    :return: Selected value based on return_fn
    """
    options = {display_fn(item): return_fn(item) for item in data}

    def search_items(search_term: str):
        if not search_term:
            return list(options)
        return [item for item in options if search_term.lower() in item.lower()]

    selected = st_searchbox(
        search_items,
        placeholder=placeholder,
        label=label,
        key=key,
        default_options=list(options),
    )
    return options.get(selected, default)
