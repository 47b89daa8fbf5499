# Only the last branch of the chain is long.  Its body is moved after the
# whole chain, so the earlier branch gets an explicit return as well.
def route(request):
    if request.method == "HEAD":
        send_headers(request)
    elif request.user is None:
        payload = render(request)
        compress(payload)
        send(request, payload)
    else:
        redirect_to_login(request)
