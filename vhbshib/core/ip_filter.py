def get_client_ip(request):
    """The client address, taking the first entry of X-Forwarded-For if present"""

    forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded_for:
        return forwarded_for.split(',')[0].strip()

    return request.META.get('REMOTE_ADDR')
