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
            name='Question',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('subject', models.CharField(max_length=100)),
                ('grade', models.CharField(max_length=50)),
                ('topic', models.CharField(max_length=200)),
                ('difficulty', models.CharField(choices=[('easy', 'Easy'), ('medium', 'Medium'), ('hard', 'Hard')], default='medium', max_length=10)),
                ('question_type', models.CharField(choices=[('MCQ', 'Multiple Choice'), ('DISC', 'Discursive')], max_length=10)),
                ('statement', models.TextField()),
                ('options', models.JSONField(blank=True, default=list, help_text='Ordered option texts (MCQ only)')),
                ('correct_index', models.PositiveIntegerField(blank=True, help_text='Index of the correct option (MCQ only)', null=True)),
                ('expected_answer', models.TextField(blank=True)),
                ('rubric', models.TextField(blank=True)),
                ('times_used', models.PositiveIntegerField(default=0)),
                ('last_used', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('deleted_at', models.DateTimeField(blank=True, db_index=True, null=True)),
                ('deleted_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='questions_deleted', to=settings.AUTH_USER_MODEL)),
                ('teacher', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='questions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['teacher', 'subject', 'grade'], name='questions_q_teacher_5a1c2e_idx'),
                    models.Index(fields=['topic'], name='questions_q_topic_8b7d41_idx'),
                    models.Index(fields=['question_type'], name='questions_q_questio_3f0e9a_idx'),
                    models.Index(fields=['difficulty'], name='questions_q_difficu_c2d6b8_idx'),
                ],
            },
        ),
    ]
