from rest_framework import serializers

from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    relatedItem = serializers.SerializerMethodField()
    isRead = serializers.BooleanField(source='is_read', read_only=True)
    isArchived = serializers.BooleanField(source='is_archived', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Notification
        fields = ['id', 'type', 'title', 'message', 'relatedItem', 'isRead', 'isArchived', 'priority', 'createdAt']
        read_only_fields = fields

    def get_relatedItem(self, obj):
        if not obj.related_item_type:
            return None
        return {'itemType': obj.related_item_type, 'itemId': obj.related_item_id}


class NotificationIdsSerializer(serializers.Serializer):
    notificationIds = serializers.ListField(child=serializers.IntegerField(), allow_empty=True)

    def to_internal_value(self, data):
        if not isinstance(data, dict) or not isinstance(data.get('notificationIds'), list):
            raise serializers.ValidationError({'notificationIds': 'notificationIds must be an array'})
        return super().to_internal_value(data)
