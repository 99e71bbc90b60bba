# ABOUTME: Title normalization shared by article keys, media names and card file names

def to_storage_key(name: str) -> str:
    """Turn a display title or file name into its URL/storage form (spaces become underscores)."""
    return name.replace(" ", "_")
