"""
bitdither preview

Run with:
    streamlit run streamlit_app.py
"""

from __future__ import annotations

import io
import time

import numpy as np
import streamlit as st
from PIL import Image, ImageDraw

from bitdither.config import DitherConfig
from bitdither.engine import BOUNDARY_POLICIES, dither
from bitdither.image_io import load_grayscale, mean_intensity_error
from bitdither.kernels import KERNEL_NAMES, KERNELS

# -- Page config -------------------------------------------------------
st.set_page_config(
    page_title="bitdither",
    page_icon=None,
    layout="wide",
    initial_sidebar_state="collapsed",
)

_DEFAULTS = DitherConfig()

# -- CSS ---------------------------------------------------------------
st.markdown("""
<style>
    .stApp {
        background-color: #faf9f6;
        color: #2a2a2a;
    }
    .title {
        font-family: 'Georgia', serif;
        font-size: 2.4rem;
        text-align: center;
        border-bottom: 1px solid #1a1a1a;
    }
    .intro {
        font-size: 0.75rem;
        line-height: 1.8;
        margin-bottom: 2rem;
    }
    .kernel-desc {
        font-family: 'Georgia', serif;
        font-size: 0.95rem;
        font-style: italic;
        color: #6a6a64;
        margin-top: -0.5rem;
        margin-bottom: 1rem;
    }
    .label-detail {
        font-family: 'Georgia', serif;
        font-size: 0.85rem;
        font-style: italic;
        color: #a0a09a;
        text-align: center;
    }
</style>
""", unsafe_allow_html=True)


# -- Helpers -----------------------------------------------------------

def _add_passepartout(img: Image.Image, border: int = 20) -> Image.Image:
    w, h = img.size
    canvas = Image.new("L", (w + border * 2, h + border * 2), 248)
    canvas.paste(img, (border, border))
    draw = ImageDraw.Draw(canvas)
    draw.rectangle(
        [border - 1, border - 1, border + w, border + h],
        outline=222, width=1,
    )
    return canvas


# -- Title -------------------------------------------------------------
st.markdown('<div class="title">bitdither</div>', unsafe_allow_html=True)
st.markdown(
    '<div class="intro">'
    "Upload any image and it will be reduced to pure black and white. Each "
    "pixel is snapped to the nearest extreme and the rounding error is pushed "
    "onto the neighbours that have not been visited yet, so regions of grey "
    "survive as patterns of dots."
    "</div>",
    unsafe_allow_html=True,
)

# -- Controls ----------------------------------------------------------
ctrl1, ctrl2 = st.columns(2)
with ctrl1:
    kernel_name = st.selectbox(
        "Kernel", KERNEL_NAMES, index=KERNEL_NAMES.index(_DEFAULTS.kernel),
    )
    st.markdown(
        f'<div class="kernel-desc">{KERNELS[kernel_name].description}</div>',
        unsafe_allow_html=True,
    )
    threshold = st.slider("Threshold", 0, 256, _DEFAULTS.threshold)
with ctrl2:
    max_side = st.slider("Max side (px)", 32, 1024, 400)
    boundary = st.selectbox(
        "Boundary", BOUNDARY_POLICIES, index=BOUNDARY_POLICIES.index(_DEFAULTS.boundary),
    )
    seed = st.number_input("Seed", min_value=0, value=42, step=1)

st.markdown("---")

# -- Upload ------------------------------------------------------------
uploaded = st.file_uploader(
    "Select artwork", type=["jpg", "jpeg", "png", "webp", "bmp", "jfif", "gif"],
)

if uploaded is None:
    st.markdown(
        '<p style="font-family: Georgia, serif; color: #bbb; font-style: italic;">'
        "Select an artwork to begin.</p>",
        unsafe_allow_html=True,
    )
    st.stop()

gray = load_grayscale(io.BytesIO(uploaded.getvalue()), max_side)
h, w = gray.shape

t0 = time.perf_counter()
result = gray.copy()
rng = np.random.default_rng(int(seed)) if KERNELS[kernel_name].randomized else None
processed = dither(result, kernel_name, threshold=threshold, rng=rng, boundary=boundary)
elapsed = time.perf_counter() - t0

col1, col2 = st.columns(2)
with col1:
    st.image(_add_passepartout(Image.fromarray(gray), border=12), use_container_width=True)
    st.markdown('<div class="label-detail">Source</div>', unsafe_allow_html=True)
with col2:
    st.image(_add_passepartout(Image.fromarray(result), border=12), use_container_width=True)
    st.markdown(f'<div class="label-detail">{kernel_name}</div>', unsafe_allow_html=True)

buf = io.BytesIO()
Image.fromarray(result).save(buf, format="PNG")
st.download_button(
    "Download PNG",
    data=buf.getvalue(),
    file_name=f"dithered_{kernel_name}.png",
    mime="image/png",
    use_container_width=True,
)

m1, m2, m3, m4 = st.columns(4)
m1.metric("Resolution", f"{w} × {h}")
m2.metric("Pixels", f"{processed:,}")
m3.metric("Time", f"{elapsed:.1f} s")
m4.metric("Tone Error", f"{mean_intensity_error(gray, result):.1f}")
