# The if branch is already the short one.
def notify(user, message):
    if user.muted:
        return
    else:
        channel = user.preferred_channel()
        channel.send(message)
