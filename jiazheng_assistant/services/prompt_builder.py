"""
Prompt assembly for the chat assistant.

Builds the system prompt (role + the creator's data report) and the user
turn (the creator's message with framing) sent to the text-generation
service. Reads records, never writes anything.
"""

from typing import List, Optional

from jiazheng_assistant.schemas.stats import AggregateStats, StyleSignals
from jiazheng_assistant.services.stats_service import StatsAggregator


EMPTY_DATA_REPORT = """**当前数据状态：** 暂无视频数据

**建议上传的数据类型：**
- 📝 视频标题和内容描述
- 📊 播放量、点赞量、评论量、转发量等表现数据
- 🏷️ 使用的关键词标签
- 📱 发布平台（抖音、小红书、快手等）
- 🏠 服务类型（保洁、月嫂、养老护理等）
- 📍 地理位置信息
- 👥 目标用户群体

**上传数据后您将获得：**
✨ 基于真实表现的个性化内容策略
📈 数据驱动的优化建议
🎯 符合您创作风格的爆款模板
💡 针对性的关键词和话题推荐"""

ROLE_INSTRUCTIONS = """你是一个专业的家政行业内容创作AI助手，具有以下能力：

1. **深度数据分析**：能够分析用户的视频数据，包括标题、内容、关键词、播放量、点赞量、评论量、转发量等
2. **个性化理解**：深入了解用户的创作习惯、地区特色、口语风格、常用词汇等个人特征
3. **内容生成**：生成接地气、口语化、能够立即执行的标题、内容和关键词
4. **专业建议**：提供基于真实数据的优化建议和策略"""

NO_DATA_STRATEGY = """**⚠️ 重要说明：用户暂未上传视频数据**

**回复策略：**
- 由于用户还没有上传具体的视频数据，无法进行个性化分析
- 应该引导用户先上传数据，说明数据的重要性和价值
- 如果用户坚持要内容建议，可以提供家政行业的通用优质模板
- 重点强调：上传数据后能获得的个性化价值（基于真实表现的分析、符合个人风格的内容等）
- 语气要友好、专业，避免让用户觉得没有数据就无法提供帮助
- 可以提供一些通用但实用的家政行业内容创作技巧作为参考"""


def format_rate(value: float, total_views: int) -> str:
    # No views means no rate at all, shown as a bare 0
    return f"{value:.2f}" if total_views > 0 else "0"


def render_style_analysis(style: StyleSignals) -> str:
    lines = []

    if style.avg_title_length > 0:
        kind = "偏爱详细描述型标题" if style.avg_title_length > 20 else "喜欢简洁有力的标题"
        lines.append(f"- **标题习惯**: 平均{style.avg_title_length}字，{kind}")

    if style.avg_content_length > 0:
        kind = "习惯详细叙述，信息量丰富" if style.avg_content_length > 100 else "偏爱简短精炼的表达"
        lines.append(f"- **内容长度**: 平均{style.avg_content_length}字，{kind}")

    if style.has_emoji:
        lines.append("- **表达风格**: 善用emoji表情，内容生动活泼")
    if style.has_exclamation:
        lines.append("- **语气特点**: 常用感叹号，表达热情有感染力")
    if style.has_question:
        lines.append("- **互动技巧**: 善用疑问句，引发用户思考和互动")
    if style.has_structured_content:
        lines.append("- **内容结构**: 喜欢使用结构化表达，逻辑清晰")
    if style.has_dialogue:
        lines.append("- **叙述方式**: 善用对话形式，增强代入感")

    if not lines:
        return "- 需要更多数据来分析您的创作风格"
    return "\n".join(lines)


def render_stats_report(stats: AggregateStats) -> str:
    """Human-readable data report embedded in prompts and canned replies."""
    if stats.video_count == 0:
        return EMPTY_DATA_REPORT

    platforms = "、".join(f"{p}({n}个)" for p, n in stats.platform_distribution.items())
    keywords = "、".join(k.keyword for k in stats.top_keywords) or "无"
    best = stats.best_record

    return f"""
**视频数量：** {stats.video_count}个
**总体数据：**
- 总播放量：{stats.total_views}
- 总点赞量：{stats.total_likes}
- 总评论量：{stats.total_comments}
- 总转发量：{stats.total_shares}

**平均表现：**
- 平均播放量：{stats.average_views}
- 平均点赞量：{stats.average_likes}
- 平均评论量：{stats.average_comments}
- 平均转发量：{stats.average_shares}

**平台分布：** {platforms}

**常用关键词：** {keywords}

**表现最佳视频：** "{best.title or '未知'}" (播放量：{best.views})

**🎯 个人创作风格分析：**
{render_style_analysis(stats.style)}

**互动率分析：**
- 点赞率：{format_rate(stats.like_rate, stats.total_views)}%
- 评论率：{format_rate(stats.comment_rate, stats.total_views)}%
- 转发率：{format_rate(stats.share_rate, stats.total_views)}%
"""


class PromptBuilder:
    def __init__(self, aggregator: Optional[StatsAggregator] = None):
        self.aggregator = aggregator or StatsAggregator()

    def build_system_prompt(self, records: Optional[List] = None) -> str:
        stats = self.aggregator.aggregate(records)
        report = render_stats_report(stats)

        if stats.video_count == 0:
            return f"""{ROLE_INSTRUCTIONS}

**用户数据分析：**
{report}

{NO_DATA_STRATEGY}"""

        pref = stats.length_preference
        return f"""{ROLE_INSTRUCTIONS}

**用户数据分析：**
{report}

**🎯 用户内容长度偏好：**
- 标题长度偏好：{pref.title_length}字左右
- 内容长度偏好：{pref.content_length}字左右

**回复要求：**
- 必须基于用户的真实数据进行分析和建议
- 回复要接地气、口语化，符合家政行业特点
- 根据用户上传真实数据中的常用语气和文字风格，生成内容
- 提供具体可执行的建议，不要空泛的理论
- 如果生成内容，要包含完整的标题、脚本和关键词
- 要体现对用户个人风格和地区特色的理解
- 内容长度要求: 生成的标题应控制在{pref.title_length}字左右，脚本内容应控制在{pref.content_length}字以上，符合用户的创作习惯"""

    def build_user_prompt(self, message: str, records: Optional[List] = None) -> str:
        count = len(self.aggregator.normalize(records))

        if count > 0:
            return f"""用户问题：{message}

请基于我上传的{count}个视频数据进行分析和回答。这些数据包含了我的创作风格、内容偏好、表现数据等信息。

请先分析我的个人特征（创作习惯、可能的地区特色、内容风格等），然后针对我的问题给出专业、个性化的建议。"""

        return f"""用户问题：{message}

**当前状态说明：**
我还没有上传任何视频数据，所以您无法基于我的具体创作风格和表现数据进行个性化分析。

**我希望得到的帮助：**
- 如果您认为我应该先上传数据才能获得更好的建议，请告诉我需要上传哪些具体信息，以及这些数据将如何帮助我
- 如果我的问题可以在没有具体数据的情况下回答，请提供家政行业的专业建议和通用优质模板
- 请说明：上传真实数据后，我能获得哪些额外的个性化价值

请用友好、专业的语气回答我的问题。"""
