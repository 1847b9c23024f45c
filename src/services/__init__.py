"""
Services layer — data the presentation layer shows next to the chat.

Sub-packages:
  dashboard_service — per-agent mock dashboard datasets
"""
