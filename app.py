import streamlit as st, json

st.set_page_config(page_title="ATS Resume Transformer", layout="centered")
st.title("ATS Resume Transformer")
st.caption("Upload your PDF or Word document to generate an ATS-compatible resume.")

# --- UI (render first) ---
upload = st.file_uploader("Upload Resume", type=["pdf", "doc", "docx"], key="w_upload")
run = st.button("Convert", type="primary", use_container_width=True, key="w_convert")

def conversion_failed(stage: str, e: Exception):
    st.error(f"Resume {stage} failed ({type(e).__name__}): {e}")

# converter imported after the widgets render, so a broken install still shows the page
try:
    from atsconvert import convert
    from atsconvert.contracts import is_error
    from atsconvert.log_setup import configure_logging
except Exception as e:
    conversion_failed("converter setup", e)
    st.stop()

configure_logging()

if run:
    bad = convert.validate_upload(getattr(upload, "name", None), getattr(upload, "type", None), getattr(upload, "size", 0))
    if bad:
        st.session_state.pop("plain_text", None)
        st.error(bad["message"]); st.stop()
    try:
        with st.spinner("Processing..."):
            res = convert.convert_upload(upload.getvalue(), upload.type)
    except Exception as e:
        conversion_failed("conversion", e)
        st.stop()
    if is_error(res):
        st.session_state.pop("plain_text", None)
        st.error(res["message"]); st.stop()
    st.session_state["plain_text"] = res.text
    st.session_state["audit"] = {**res.audit, "meta": res.meta}

plain_text = st.session_state.get("plain_text", "")
if plain_text:
    payload = convert.download_payload(plain_text)
    if is_error(payload):
        st.error(payload["message"])
    else:
        st.download_button("Download Text", data=payload, file_name=convert.DOWNLOAD_FILENAME,
                           mime=convert.DOWNLOAD_MIME, key="w_download")
    st.subheader("Extracted Text Preview")
    st.text_area("Preview", plain_text, height=420, label_visibility="collapsed")
    with st.expander("Normalizer audit", expanded=False):
        st.code(json.dumps(st.session_state.get("audit", {}), ensure_ascii=False, indent=2), language="json")
