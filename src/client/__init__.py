"""Client-side gateway, session store and terminal UI."""
