# This module handles Context engineering

#  +--------------------------+
# |      Working memory      |   (Per session, in process)
# |--------------------------|
# | Startup idea             |
# | Cached analyses (1h TTL) |
# | Focus, concerns, recs    |
# | Todos                    |
# +--------------------------+
#         ^
#         |  extract_* / detect_user_intent
#         |
# +--------------------------+
# |      User message        |
# +--------------------------+

#    \    /
#     \  /
#      \/
# +------------------------------+
# |        Context block         |   (Rendered for each turn)
# |------------------------------|
# | --- CONTEXT ---              |
# | idea, analyses, focus,       |
# | concerns, recommendations,   |
# | sorted todos, current task   |
# | --- END CONTEXT ---          |
# +------------------------------+
#         |
#         v
#   [system prompt -> LLM / tool calls]
