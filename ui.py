import logging
import os

import streamlit as st

from app.ui.client import export_workbook, extract_document

logger = logging.getLogger(__name__)

BASE_URL = os.getenv("BASE_URL", "http://localhost:8000/v1")

SENTIMENT_COLORS = {
    "optimistic": "green",
    "cautious": "orange",
    "neutral": "gray",
    "pessimistic": "red",
}

st.set_page_config(page_title="Financial Document Extractor", layout="wide")

st.title("Financial Document Extractor")

# Transient per-session state; nothing here is persisted.
for key, default in {
    "processing": False,
    "result": None,
    "error": None,
    "excel": None,
}.items():
    st.session_state.setdefault(key, default)


def _start_processing():
    st.session_state.processing = True
    st.session_state.result = None
    st.session_state.error = None
    st.session_state.excel = None


def _clear():
    st.session_state.result = None
    st.session_state.error = None
    st.session_state.excel = None


def extract(uploaded_file, api_key: str):
    data, error = extract_document(
        BASE_URL, uploaded_file.name, uploaded_file.getvalue(), uploaded_file.type, api_key
    )
    st.session_state.result = data
    st.session_state.error = error


def export(result: dict):
    excel, error = export_workbook(BASE_URL, result)
    st.session_state.excel = excel
    st.session_state.error = error


st.header("Upload")

api_key = st.text_input("Gemini API Key", type="password")
uploaded_file = st.file_uploader("Financial document", type=["pdf", "txt"])

c1, c2 = st.columns([1, 5])
c1.button(
    "Process Document",
    on_click=_start_processing,
    disabled=st.session_state.processing or uploaded_file is None or not api_key,
)
c2.button("Clear", on_click=_clear, disabled=st.session_state.processing)

if st.session_state.processing:
    try:
        if uploaded_file is None or not api_key:
            st.session_state.error = "File and API Key are required"
        else:
            with st.spinner("Analyzing document..."):
                extract(uploaded_file, api_key)
    except Exception as e:
        logger.exception("Document processing failed")
        st.session_state.error = f"Processing failed: {e}"
    finally:
        st.session_state.processing = False
    st.rerun()

if st.session_state.error:
    st.error(st.session_state.error)

result = st.session_state.result
if result:
    st.header(f"{result.get('companyName') or 'Unknown company'} - {result.get('period') or result.get('year') or ''}")

    st.subheader("Income Statement")
    rows = result.get("incomeStatement") or []
    if rows:
        st.table([
            {
                "Line item": row.get("description"),
                "Value": row.get("value"),
                "Currency": row.get("currency") or "",
                "Unit": row.get("unit") or "",
            }
            for row in rows
        ])
    else:
        st.caption("No income statement lines extracted.")

    st.subheader("Qualitative Analysis")
    m1, m2 = st.columns(2)
    sentiment = result.get("sentiment") or "neutral"
    m1.markdown(f"**Management Sentiment:** :{SENTIMENT_COLORS.get(sentiment, 'gray')}[{sentiment}]")
    m2.markdown(f"**Confidence Level:** {result.get('confidenceDetail') or '-'}")

    p1, p2 = st.columns(2)
    with p1:
        st.markdown("**Key Positives**")
        for item in result.get("keyPositives") or []:
            st.markdown(f"- {item}")
    with p2:
        st.markdown("**Key Concerns**")
        for item in result.get("keyConcerns") or []:
            st.markdown(f"- {item}")

    st.markdown("**Forward Guidance**")
    st.write(result.get("forwardGuidance") or "-")

    st.markdown("**Capacity Utilization**")
    st.write(result.get("capacityUtilization") or "-")

    st.markdown("**Growth Initiatives**")
    for item in result.get("growthInitiatives") or []:
        st.markdown(f"- {item}")

    if st.button("Export to Excel"):
        with st.spinner("Generating workbook..."):
            export(result)
        st.rerun()

    if st.session_state.excel:
        filename, content = st.session_state.excel
        st.download_button(
            "Download Excel",
            data=content,
            file_name=filename,
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )
