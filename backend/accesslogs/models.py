from django.db import models


class AccessLog(models.Model):
    """One successfully ingested nginx access-log line."""

    id = models.AutoField(primary_key=True)
    epoch = models.BigIntegerField(db_index=True)
    remote_addr = models.TextField(null=True, blank=True)
    remote_user = models.TextField(null=True, blank=True)
    status = models.IntegerField(null=True, blank=True)
    method = models.TextField(null=True, blank=True)
    path = models.TextField(null=True, blank=True)
    version = models.TextField(null=True, blank=True)
    body_bytes_sent = models.IntegerField(null=True, blank=True)
    referer = models.TextField(null=True, blank=True)
    user_agent = models.TextField(null=True, blank=True)
    host = models.TextField()

    class Meta:
        db_table = "logs"
        indexes = [
            models.Index(fields=["host", "epoch"], name="logs_host_epoch_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.remote_addr} {self.method} {self.host}{self.path} @ {self.epoch}"
