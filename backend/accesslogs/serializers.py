from rest_framework import serializers

from accesslogs.queries import Range


class RangeSerializer(serializers.Serializer):
    to = serializers.DateTimeField()

    def get_fields(self):
        # "from" is a keyword, so it cannot be declared as a class attribute
        fields = super().get_fields()
        fields["from"] = serializers.DateTimeField()
        return fields

    def validate(self, attrs):
        return Range(from_=attrs["from"], to=attrs["to"])


class TargetSerializer(serializers.Serializer):
    target = serializers.CharField()
    refId = serializers.CharField(required=False, allow_blank=True, default="")
    type = serializers.CharField(required=False, allow_blank=True, default="timeserie")


class QuerySerializer(serializers.Serializer):
    range = RangeSerializer()
    intervalMs = serializers.IntegerField(min_value=0, required=False, default=1000)
    # Sent by Grafana; results are not downsampled
    maxDataPoints = serializers.IntegerField(min_value=0, required=False, default=0)
    targets = TargetSerializer(many=True)


class SearchSerializer(serializers.Serializer):
    target = serializers.CharField(required=False, allow_blank=True, default="")
