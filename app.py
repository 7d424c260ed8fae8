"""Streamlit deployment entry point: `streamlit run app.py` runs app/app.py."""
import os
import runpy
import sys

here = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.join(here, "src"))
runpy.run_path(os.path.join(here, "app", "app.py"), run_name="__main__")
