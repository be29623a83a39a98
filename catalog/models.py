from django.db import models


class Product(models.Model):
    name = models.TextField()
    sku = models.TextField(blank=True, default='')
    date_created = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'product'
        indexes = [
            models.Index(fields=['name'], name='name_idx'),
        ]

    def __str__(self):
        return self.name
