# src/kafka_consumer_config/core/__init__.py
"""
Core do kafka-consumer-config.

Reúne a infraestrutura genérica de configuração (árvores, merge,
referências e lookups tipados) sobre a qual o modelo tipado do
consumidor é construído.

Limites explícitos:
    - Não conhece o cliente Kafka
    - Não depende do modelo `KafkaConsumerConfig`
"""
