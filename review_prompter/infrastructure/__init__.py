# Infrastructure Layer
# ====================
# Host-side implementations of the review prompter's collaborators:
# - config/: Environment and settings management
# - persistence/: SQLite options, users, forms and entries
# - notices/: Admin notice queue and dismissal
# - links/: UTM-tracked outbound links
#
# This layer can be replaced entirely without affecting the domain layer.
