import os
from datetime import date, timedelta

import requests
import streamlit as st

BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8080")


def get_hotels(params: dict) -> dict:
    resp = requests.get(f"{BACKEND_URL}/hotels", params=params, timeout=10)
    if resp.status_code == 400:
        raise ValueError(resp.text)
    resp.raise_for_status()
    return resp.json()


st.set_page_config(page_title="Hotel Map", layout="wide")
st.title("Hotels nearby")
st.caption("Backend: FastAPI | UI: Streamlit | Search radius 10 km")

with st.sidebar.form("search_form"):
    st.subheader("Stay")
    in_date = st.date_input("Check-in", value=date(2015, 4, 9))
    out_date = st.date_input("Check-out", value=date(2015, 4, 9) + timedelta(days=1))
    lat = st.number_input("Latitude", value=37.7879, format="%.4f")
    lon = st.number_input("Longitude", value=-122.4075, format="%.4f")
    submitted = st.form_submit_button("Search")

if submitted:
    payload = {
        "inDate": in_date.isoformat(),
        "outDate": out_date.isoformat(),
        "lat": str(lat),
        "lon": str(lon),
    }
    try:
        st.session_state["collection"] = get_hotels(payload)
    except Exception as exc:  # noqa: BLE001
        st.error(f"Search failed: {exc}")
        st.session_state.pop("collection", None)

collection = st.session_state.get("collection")

if collection:
    features = collection.get("features") or []
    st.subheader(f"{len(features)} hotel(s) available")
    if features:
        # GeoJSON coordinates are [lon, lat]
        st.map(
            {
                "lat": [f["geometry"]["coordinates"][1] for f in features],
                "lon": [f["geometry"]["coordinates"][0] for f in features],
            }
        )
        for feature in features:
            props = feature["properties"]
            st.markdown(f"- **{props['name']}** | {props['phone_number']}")
