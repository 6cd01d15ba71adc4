# Presentation Layer
# ==================
# FastAPI admin panel, lifecycle hook registry and HTML templates.
