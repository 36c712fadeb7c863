"""
Initial migration for Supplyman models.
"""

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):
    """Create Supplyman models: StockEntry, MovementDocument, DetailLine, StockMove."""

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='StockEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('resource_id', models.CharField(max_length=64, unique=True, verbose_name='Insumo')),
                ('amount', models.BigIntegerField(default=0, verbose_name='Quantidade')),
                ('unit', models.CharField(blank=True, default='', help_text='Unidade do estoque. Vazio = unidade não informada.', max_length=8, verbose_name='Unidade')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Estoque',
                'verbose_name_plural': 'Estoques',
                'ordering': ['resource_id'],
            },
        ),
        migrations.CreateModel(
            name='MovementDocument',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(db_index=True, verbose_name='Data')),
                ('direction', models.CharField(choices=[('increases', 'Entrada'), ('decreases', 'Saída')], max_length=16, verbose_name='Sentido')),
                ('kind', models.CharField(blank=True, default='', help_text='Ex: compra, consumo, colheita', max_length=32, verbose_name='Tipo')),
                ('reference', models.CharField(blank=True, default='', max_length=100, verbose_name='Referência')),
                ('notes', models.TextField(blank=True, default='', verbose_name='Observações')),
                ('metadata', models.JSONField(blank=True, default=dict, verbose_name='Metadados')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Documento de Movimentação',
                'verbose_name_plural': 'Documentos de Movimentação',
                'ordering': ['-date', '-pk'],
            },
        ),
        migrations.CreateModel(
            name='DetailLine',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('resource_id', models.CharField(db_index=True, max_length=64, verbose_name='Insumo')),
                ('quantity', models.PositiveIntegerField(verbose_name='Quantidade')),
                ('unit', models.CharField(blank=True, default='', help_text='Vazio = unidade do insumo', max_length=8, verbose_name='Unidade')),
                ('stock_quantity', models.PositiveBigIntegerField(help_text='Efeito aplicado no estoque, na unidade do insumo', verbose_name='Quantidade em estoque')),
                ('is_removed', models.BooleanField(default=False, verbose_name='Removida')),
                ('is_settled', models.BooleanField(default=False, verbose_name='Liquidada')),
                ('metadata', models.JSONField(blank=True, default=dict, verbose_name='Metadados')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('document', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='lines', to='supplyman.movementdocument', verbose_name='Documento')),
            ],
            options={
                'verbose_name': 'Linha de Detalhe',
                'verbose_name_plural': 'Linhas de Detalhe',
                'ordering': ['pk'],
            },
        ),
        migrations.CreateModel(
            name='StockMove',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('delta', models.BigIntegerField(help_text='Positivo = entrada, Negativo = saída', verbose_name='Variação')),
                ('reason', models.CharField(max_length=255, verbose_name='Motivo')),
                ('line_id', models.PositiveBigIntegerField(blank=True, null=True, verbose_name='Linha')),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Data/Hora')),
                ('document', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='moves', to='supplyman.movementdocument', verbose_name='Documento')),
                ('entry', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='moves', to='supplyman.stockentry', verbose_name='Estoque')),
            ],
            options={
                'verbose_name': 'Movimento',
                'verbose_name_plural': 'Movimentos',
                'ordering': ['timestamp', 'pk'],
            },
        ),
        # Constraints and indexes
        migrations.AddConstraint(
            model_name='stockentry',
            constraint=models.CheckConstraint(condition=models.Q(amount__gte=0), name='supplyman_stockentry_amount_non_negative'),
        ),
        migrations.AddConstraint(
            model_name='detailline',
            constraint=models.CheckConstraint(condition=models.Q(quantity__gt=0), name='supplyman_detailline_quantity_positive'),
        ),
        migrations.AddIndex(
            model_name='stockmove',
            index=models.Index(fields=['entry', 'timestamp'], name='supplyman_s_entry_i_5c1f0e_idx'),
        ),
    ]
