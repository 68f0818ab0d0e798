"""Template registry — maps template names to template classes.

Each template knows its channel and how to render its parameters from a
context dict. WhatsApp templates return their body parameters in the order
the approved MSG91 template expects them.
"""

from notifications.templates.cart_recovery import AbandonedCartTemplate, CartRecoveryEmailTemplate
from notifications.templates.cod_reminder import CODReminderTemplate
from notifications.templates.delivery import OrderDeliveredTemplate, OutForDeliveryTemplate
from notifications.templates.order_confirmation import OrderConfirmationTemplate
from notifications.templates.order_shipped import OrderShippedTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    template.template_name: template
    for template in (
        OrderConfirmationTemplate,
        OrderShippedTemplate,
        OutForDeliveryTemplate,
        OrderDeliveredTemplate,
        AbandonedCartTemplate,
        CODReminderTemplate,
        CartRecoveryEmailTemplate,
    )
}


def get_template(template_name: str):
    """Look up a template class by name."""
    template_cls = TEMPLATE_REGISTRY.get(template_name)
    if template_cls is None:
        raise ValueError(f"No template registered for: {template_name}")
    return template_cls
