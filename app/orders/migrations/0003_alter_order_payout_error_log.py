from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ("orders", "0002_add_deal_status_schedule"),
    ]

    operations = [
        migrations.AlterField(
            model_name="order",
            name="payout_error_log",
            field=models.TextField(blank=True, null=True),
        ),
    ]
