"""Entry point: ``streamlit run nextchat_ui/streamlit_app.py``."""
from nextchat_ui.app import main

main()
