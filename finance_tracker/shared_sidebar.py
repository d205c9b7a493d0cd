"""Shared sidebar and session services for the multi-page app.

Every page calls :func:`render_shared_sidebar` to obtain the storage-backed
services and the per-session :class:`PresentationContext`.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import streamlit as st

from .config import configure_logging, ensure_data_directories, get_data_dir
from .context import PresentationContext
from .goals import GoalManager
from .rates import RateLookupService
from .storage import JsonStorage
from .transactions import TransactionLedger

_CONTEXT_KEY = 'presentation_context'
_PENDING_KEY = 'pending_confirmation'


def _services() -> Dict[str, Any]:
    if 'services' not in st.session_state:
        configure_logging()
        ensure_data_directories()
        storage = JsonStorage()
        st.session_state.services = {
            'storage': storage,
            'goals': GoalManager(storage),
            'ledger': TransactionLedger(storage),
            'rates': RateLookupService(),
        }
    return st.session_state.services


def get_context() -> PresentationContext:
    if _CONTEXT_KEY not in st.session_state:
        st.session_state[_CONTEXT_KEY] = PresentationContext()
    return st.session_state[_CONTEXT_KEY]


def render_shared_sidebar() -> Dict[str, Any]:
    """Render shared sidebar elements available on all pages.

    Returns:
        Dict with keys: 'storage', 'goals', 'ledger', 'rates', 'context'
    """
    services = dict(_services())
    services['context'] = get_context()

    st.sidebar.title("💰 Finance Tracker")
    st.sidebar.caption(f"Data stored in {get_data_dir()}")
    if st.sidebar.button("🔄 Refresh"):
        rerun()
    return services


def request_confirmation(action: str, record_id: int) -> None:
    """Remember that ``action`` on ``record_id`` awaits confirmation."""
    st.session_state[_PENDING_KEY] = (action, record_id)


def pending_confirmation() -> Optional[tuple]:
    return st.session_state.get(_PENDING_KEY)


def clear_confirmation() -> None:
    st.session_state.pop(_PENDING_KEY, None)


def render_confirmation(message: str, key: str) -> Optional[bool]:
    """Show a confirm/cancel prompt.

    Returns:
        True or False once the user chose, None while undecided.
    """
    st.warning(message)
    col1, col2 = st.columns(2)
    with col1:
        if st.button("✅ Confirm", key=f"confirm_{key}"):
            clear_confirmation()
            return True
    with col2:
        if st.button("❌ Cancel", key=f"cancel_{key}"):
            clear_confirmation()
            return False
    return None


def rerun() -> None:
    if hasattr(st, 'rerun'):
        st.rerun()
    elif hasattr(st, 'experimental_rerun'):
        st.experimental_rerun()
