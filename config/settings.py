from pathlib import Path

from decouple import Csv, config

# -------------------------------
# Diretórios base
# -------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent

# -------------------------------
# Segurança e debug
# -------------------------------
SECRET_KEY = config('SECRET_KEY', default='labora-dev-insecure-key')
DEBUG = config('DEBUG', default=False, cast=bool)
ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1,testserver', cast=Csv())

# -------------------------------
# Cookies & CSRF
# -------------------------------
CSRF_COOKIE_SECURE      = config('CSRF_COOKIE_SECURE', default=False, cast=bool) # Desenvolvido para HTTPS
CSRF_COOKIE_HTTPONLY    = config('CSRF_COOKIE_HTTPONLY', default=True, cast=bool)
CSRF_COOKIE_SAMESITE    = config('CSRF_COOKIE_SAMESITE', default='Lax')

AUTH_COOKIE_NAME     = config('AUTH_COOKIE_NAME', default='authToken')
AUTH_COOKIE_SECURE   = config('AUTH_COOKIE_SECURE', default=False, cast=bool) # Desenvolvido para HTTPS
AUTH_COOKIE_HTTPONLY = config('AUTH_COOKIE_HTTPONLY', default=True, cast=bool)
AUTH_COOKIE_SAMESITE = config('AUTH_COOKIE_SAMESITE', default='Lax')
AUTH_COOKIE_MAX_AGE  = config('AUTH_COOKIE_MAX_AGE', default=3600, cast=int)

SECURE_SSL_REDIRECT          = config('SECURE_SSL_REDIRECT', default=False, cast=bool)
SECURE_PROXY_SSL_HEADER      = ('HTTP_X_FORWARDED_PROTO', 'https')

# -------------------------------
# CORS
# -------------------------------
CORS_ALLOW_ALL_ORIGINS = config('CORS_ALLOW_ALL_ORIGINS', default=False, cast=bool)
CORS_ALLOW_CREDENTIALS = config('CORS_ALLOW_CREDENTIALS', default=True, cast=bool)
CSRF_TRUSTED_ORIGINS  = config('CSRF_TRUSTED_ORIGINS', default='http://localhost:5173', cast=Csv())
CORS_ALLOWED_ORIGINS   = config('CORS_ALLOWED_ORIGINS',   default='http://localhost:5173', cast=Csv())
CORS_ALLOW_METHODS     = config('CORS_ALLOW_METHODS',     default='GET,POST,PUT,PATCH,OPTIONS', cast=Csv())
CORS_ALLOW_HEADERS     = config('CORS_ALLOW_HEADERS',     default='Authorization,Content-Type,X-CSRFToken', cast=Csv())

# -------------------------------
# Armazenamento e autenticação externos
# -------------------------------
SUPABASE_URL      = config('SUPABASE_URL', default='http://localhost:54321')
SUPABASE_ANON_KEY = config('SUPABASE_ANON_KEY', default='')
SUPABASE_TIMEOUT  = config('SUPABASE_TIMEOUT', default=10.0, cast=float)
SUPABASE_RETRIES  = config('SUPABASE_RETRIES', default=3, cast=int)
AUTH_EMAIL_REDIRECT_TO = config('AUTH_EMAIL_REDIRECT_TO', default='http://localhost:5173')

# -------------------------------
# Documentos (PDF)
# -------------------------------
LOGO_PATH = config('LOGO_PATH', default=str(BASE_DIR / 'static' / 'labora-tech-logo.png'))

# -------------------------------
# Logging
# -------------------------------
LOG_LEVEL = config('LOG_LEVEL', default='INFO')
JSON_LOGS = config('JSON_LOGS', default=False, cast=bool)

# -------------------------------
# Apps, Middleware, URLs
# -------------------------------
INSTALLED_APPS = [
    'corsheaders',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.staticfiles',
    'rest_framework',
    'drf_yasg',
    'labora_api.apps.LaboraConfig',
    'plugins.django_interface.apps.DjangoInterfaceConfig',
]

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'plugins.django_interface.request_middleware.RequestContextMiddleware',
]

ROOT_URLCONF = 'labora_api.urls'
WSGI_APPLICATION = 'labora_api.wsgi.application'
ASGI_APPLICATION = 'labora_api.asgi.application'

# -------------------------------
# Templates
# -------------------------------
TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
            ],
        },
    },
]

# -------------------------------
# REST Framework
# -------------------------------
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "labora_core.adapters.security.session_authentication.StoreSessionAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": (
        "plugins.django_interface.permissions.HasStoreSession",
    ),
    "EXCEPTION_HANDLER": "plugins.django_interface.exception_handler.labora_exception_handler",
    "UNAUTHENTICATED_USER": None,
}
SWAGGER_SETTINGS = {
    'SECURITY_DEFINITIONS': {
        'Bearer': {
            'type': 'apiKey', 'name': 'Authorization', 'in': 'header'
        }
    },
}

# -------------------------------
# Banco de Dados
# -------------------------------
# Os dados de negócio ficam no armazenamento externo; o banco local só
# atende às apps de contrib do Django.
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME':   config('DB_NAME', default=str(BASE_DIR / 'db.sqlite3')),
    }
}

# -------------------------------
# Internacionalização
# -------------------------------
LANGUAGE_CODE = 'pt-br'
TIME_ZONE     = 'America/Sao_Paulo'
USE_I18N      = True
USE_TZ        = True

# -------------------------------
# Arquivos estáticos
# -------------------------------
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
