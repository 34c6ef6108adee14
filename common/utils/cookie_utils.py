from flask import after_this_request, current_app


def _cookie_options(max_age=None):
    options = {
        'httponly': True,
        'secure': current_app.config.get('COOKIE_SECURE', False),
        'samesite': current_app.config.get('COOKIE_SAMESITE', 'Lax'),
        'path': '/',
    }
    if max_age is not None:
        options['max_age'] = max_age
    return options


def set_auth_cookies(access_token, refresh_token):
    config = current_app.config
    access_cookie = config.get('ACCESS_TOKEN_COOKIE', 'accessToken')
    refresh_cookie = config.get('REFRESH_TOKEN_COOKIE', 'refreshToken')
    access_max_age = int(config['JWT_ACCESS_TOKEN_EXPIRES'].total_seconds())
    refresh_max_age = int(config['JWT_REFRESH_TOKEN_EXPIRES'].total_seconds())

    @after_this_request
    def _set(response):
        response.set_cookie(access_cookie, access_token, **_cookie_options(access_max_age))
        response.set_cookie(refresh_cookie, refresh_token, **_cookie_options(refresh_max_age))
        return response


def clear_auth_cookies():
    config = current_app.config
    access_cookie = config.get('ACCESS_TOKEN_COOKIE', 'accessToken')
    refresh_cookie = config.get('REFRESH_TOKEN_COOKIE', 'refreshToken')

    @after_this_request
    def _clear(response):
        options = _cookie_options()
        response.delete_cookie(access_cookie, path=options['path'], secure=options['secure'],
                               httponly=True, samesite=options['samesite'])
        response.delete_cookie(refresh_cookie, path=options['path'], secure=options['secure'],
                               httponly=True, samesite=options['samesite'])
        return response
