from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Exam',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=200)),
                ('subject', models.CharField(max_length=100)),
                ('grade', models.CharField(max_length=50)),
                ('topics', models.JSONField(default=list, help_text='Topics the questions were drawn from')),
                ('mode', models.CharField(choices=[('MIXED', 'Mixed'), ('MCQ', 'Multiple Choice only'), ('DISC', 'Discursive only')], default='MIXED', max_length=10)),
                ('question_ids', models.JSONField(default=list)),
                ('versions', models.JSONField(default=list, help_text='Per-version question and option orders')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('teacher', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='exams', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['teacher', 'subject', 'grade', '-created_at'], name='exams_exam_teacher_9d2f4b_idx'),
                ],
            },
        ),
    ]
