# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Powiadomienia o zamowieniach, przez Celery (asynchronicznie).
    """

    @staticmethod
    def send_order_notification(user_id: int, order_id: int):
        send_order_notification_task.delay(user_id, order_id)


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int):
    """
    Na razie tylko log "zamowienie przyjete" - tu mozna podpiac email/push.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} placed successfully")

    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
