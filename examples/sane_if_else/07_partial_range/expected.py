def existing(job):
    if job.ready:
        job.prepare()
        job.run()
    else:
        job.defer()


def added(job):
    if not job.ready:
        job.defer()
        return
    job.prepare()
    job.run()
