# The else branch already raises, so no return is added.
def load_profile(user_id, cache):
    if user_id not in cache:
        raise KeyError(user_id)
    profile = cache[user_id]
    profile.touch()
    return profile
