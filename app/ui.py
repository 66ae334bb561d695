# Run from project root: streamlit run app/ui.py
# UI talks to the relay (POST /api/QueryChatbot) and shows the top knowledge-base answer.

import os

import requests
import streamlit as st

# Backend config
API_BASE = os.environ.get("API_BASE", "http://localhost:8000")
QUERY_URL = f"{API_BASE}/api/QueryChatbot"


def top_answer(payload: dict) -> tuple[str, float | None]:
    """Pick answers[0] from a knowledge-base payload; (text, confidence)."""
    answers = payload.get("answers") or []
    if not answers:
        return "No answer.", None
    first = answers[0] or {}
    return first.get("answer") or "No answer.", first.get("confidenceScore")


st.title("Portfolio Chatbot")

# Show which auth mode the relay is running in
try:
    r = requests.get(f"{API_BASE}/health", timeout=10)
    if r.ok:
        st.caption(f"Relay is up ({r.json().get('mode', 'unknown')} mode).")
    else:
        st.caption("Could not read relay status.")
except requests.RequestException:
    st.caption("Relay not reachable — start the API first.")

if "messages" not in st.session_state:
    st.session_state.messages = []
if st.button("New chat", key="new_chat"):
    st.session_state.messages = []
    st.rerun()

for msg in st.session_state.messages:
    with st.chat_message(msg["role"]):
        st.markdown(msg["content"])

# If we just submitted a question, ask the relay while showing "Thinking..."
if st.session_state.get("pending_query"):
    prompt = st.session_state.pending_query
    with st.chat_message("assistant"):
        thinking_placeholder = st.empty()
        thinking_placeholder.caption("Thinking...")
        answer_placeholder = st.empty()
        try:
            r = requests.post(QUERY_URL, json={"question": prompt}, timeout=30)
            thinking_placeholder.empty()
            if r.ok:
                answer, confidence = top_answer(r.json())
                answer_placeholder.markdown(answer)
                if confidence is not None:
                    st.caption(f"Confidence: {confidence:.2f}")
            else:
                data = r.json() if r.headers.get("content-type", "").startswith("application/json") else {}
                answer = f"Error: {r.status_code} — {data.get('error') or r.text[:200]}"
                answer_placeholder.error(answer)
        except requests.RequestException as e:
            answer = f"Connection failed: {e}"
            thinking_placeholder.empty()
            answer_placeholder.error(answer)
        st.session_state.messages.append({"role": "assistant", "content": answer})
    del st.session_state["pending_query"]
    st.rerun()

if prompt := st.chat_input("Ask about the portfolio"):
    st.session_state.messages.append({"role": "user", "content": prompt})
    st.session_state.pending_query = prompt
    st.rerun()
