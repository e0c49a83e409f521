# =========================================================
# Serializers compatíveis com as *entities* (e não com
# modelos Django): somente leitura, a entrada é validada
# pelos DTOs pydantic + form_validation.
# =========================================================
from rest_framework import serializers


# ───────────────────────────────────────────────
# Clientes
# ───────────────────────────────────────────────
class AddressSerializer(serializers.Serializer):
    street       = serializers.CharField()
    number       = serializers.CharField()
    complement   = serializers.CharField(allow_blank=True, allow_null=True)
    neighborhood = serializers.CharField()
    city         = serializers.CharField()
    state        = serializers.CharField()
    zip_code     = serializers.CharField()


class ClientSerializer(serializers.Serializer):
    id          = serializers.CharField()
    full_name   = serializers.CharField()
    email       = serializers.EmailField()
    cpf         = serializers.CharField(allow_null=True)
    cnpj        = serializers.CharField(allow_null=True)
    document    = serializers.CharField()
    phone       = serializers.CharField()
    is_whatsapp = serializers.BooleanField()
    address     = AddressSerializer()
    created_at  = serializers.DateTimeField(allow_null=True)


class ClientSearchResultSerializer(serializers.Serializer):
    """Dados usados para preencher um orçamento a partir do cliente escolhido."""
    id        = serializers.CharField()
    full_name = serializers.CharField()
    document  = serializers.CharField()


# ───────────────────────────────────────────────
# Orçamentos
# ───────────────────────────────────────────────
class QuoteSerializer(serializers.Serializer):
    id                      = serializers.CharField()
    number                  = serializers.IntegerField(allow_null=True)
    client_id               = serializers.CharField(allow_null=True)
    client_name             = serializers.CharField()
    client_document         = serializers.CharField()
    service_id              = serializers.CharField(allow_null=True)
    category_id             = serializers.CharField(allow_null=True)
    service_description     = serializers.CharField()
    observations            = serializers.CharField(allow_null=True)
    value                   = serializers.DecimalField(max_digits=14, decimal_places=2)
    payment_method          = serializers.CharField()
    status                  = serializers.CharField(source="status.value")
    status_label            = serializers.CharField()
    rejection_justification = serializers.CharField(allow_null=True)
    user_id                 = serializers.CharField(allow_null=True)
    created_at              = serializers.DateTimeField(allow_null=True)


class TransitionResultSerializer(serializers.Serializer):
    quote   = QuoteSerializer()
    changed = serializers.BooleanField()


# ───────────────────────────────────────────────
# Catálogo de serviços
# ───────────────────────────────────────────────
class ServiceCategorySerializer(serializers.Serializer):
    id   = serializers.CharField()
    name = serializers.CharField()


class ServiceSerializer(serializers.Serializer):
    id                  = serializers.CharField()
    category_id         = serializers.CharField()
    name                = serializers.CharField()
    default_description = serializers.CharField(allow_null=True)
    base_price          = serializers.DecimalField(max_digits=14, decimal_places=2, allow_null=True)


# ───────────────────────────────────────────────
# Autenticação
# ───────────────────────────────────────────────
class AuthUserSerializer(serializers.Serializer):
    id    = serializers.CharField()
    email = serializers.CharField()
