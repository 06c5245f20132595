version_info = (0, 1, 0)
