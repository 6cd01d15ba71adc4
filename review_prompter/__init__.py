# Review Prompter - Review Requests and Footer Promotion for a Forms Plugin Admin
# ===============================================================================
# Asks site administrators for a product review once they are engaged enough,
# and promotes support/docs/community links in the admin footer.
#
# ARCHITECTURE LAYERS:
# - Presentation:   FastAPI admin panel and hook registry (web/)
# - Domain:         Review prompting rules (no external dependencies)
# - Infrastructure: SQLite options, notice queue, link builder, config
#
# The domain layer talks to the host only through injected collaborators,
# so the admin panel can be swapped for another host.
