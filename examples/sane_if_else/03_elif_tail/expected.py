# Only the last branch of the chain is long.  Its body is moved after the
# whole chain, so the earlier branch gets an explicit return as well.
def route(request):
    if request.method == "HEAD":
        send_headers(request)
        return
    elif request.user is not None:
        redirect_to_login(request)
        return
    payload = render(request)
    compress(payload)
    send(request, payload)
