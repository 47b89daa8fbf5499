# The else branch already raises, so no return is added.
def load_profile(user_id, cache):
    if user_id in cache:
        profile = cache[user_id]
        profile.touch()
        return profile
    else:
        raise KeyError(user_id)
