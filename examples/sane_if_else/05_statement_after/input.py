# Something still runs after the if/else, so it is left alone.
def sync(remote, local):
    if remote.changed:
        data = remote.fetch()
        local.store(data)
        local.index(data)
    else:
        local.touch()
    local.close()
