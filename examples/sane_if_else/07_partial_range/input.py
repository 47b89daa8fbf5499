def existing(job):
    if job.ready:
        job.prepare()
        job.run()
    else:
        job.defer()


def added(job):
    if job.ready:
        job.prepare()
        job.run()
    else:
        job.defer()
