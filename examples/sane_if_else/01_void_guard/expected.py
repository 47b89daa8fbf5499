# The happy path is nested under the if while the else only logs.
# saneif moves the short branch up front as a guard clause.
def publish(article, feed):
    if not article.approved:
        log.info("skipping unapproved article %s", article.id)
        return
    feed.add(article)
    feed.notify_subscribers(article)
    article.mark_published()
