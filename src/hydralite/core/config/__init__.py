# src/hydralite/core/config/__init__.py

"""
Camada de configuração do hydralite.

Responsabilidades do pacote:
    - Modelo de árvore tipada (`ConfigNode`) e deep-merge determinístico
    - Gramática de paths pontilhados (com escape) e navegação/atribuição
    - Leitura de YAML para a árvore e serialização canônica de volta
    - Composição de arquivos via lista `defaults`, com detecção de ciclos
    - Overrides `[+]path=valor` e resolução de interpolações `${...}`

Princípios fundamentais:
    - Nenhuma heurística implícita durante merge
    - Overrides são sempre explícitos (`+` para chaves novas)
    - A mesma entrada sempre produz a mesma configuração final

Invariantes:
    - Mappings têm sempre chaves string
    - Conflitos estruturais são tratados como erro

Limites explícitos:
    - Não valida schema
    - Não conhece a semântica de domínio das chaves
"""
