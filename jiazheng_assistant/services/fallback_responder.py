"""
Rule-based replies used when the text-generation service is unavailable.

`generate_fallback_response` classifies the message, picks the matching
canned template and fills it from the creator's own numbers. It never
raises and never returns an empty string.
"""

import logging
from typing import List, Optional

from jiazheng_assistant.schemas.video import VideoData, platform_name
from jiazheng_assistant.services.intent_classifier import IntentKind, classify_intent
from jiazheng_assistant.services.prompt_builder import render_stats_report
from jiazheng_assistant.services.stats_service import StatsAggregator

logger = logging.getLogger(__name__)

GENERIC_KEYWORDS = "家政服务、专业保洁、月嫂育婴、家政阿姨、服务到家"

CAPABILITIES = """我可以为您提供：
📊 **综合分析** - 深度分析您的创作数据和风格特征
💡 **一键生成** - 生成个性化的爆款标题和内容脚本
⚡ **追踪热点** - 结合最新热点创作追热点内容
🎯 **定制创作** - 根据您的具体需求定制内容方案

请点击上方的快捷操作，或者直接告诉我您的需求！"""

SAFE_REPLY = f"""您好！我是您的AI家政运营助手。

{CAPABILITIES}"""


def _all_keywords(videos: List[VideoData]) -> List[str]:
    return [k for v in videos for k in v.keywords]


class FallbackResponder:
    def __init__(self, aggregator: Optional[StatsAggregator] = None):
        self.aggregator = aggregator or StatsAggregator()
        self._handlers = {
            IntentKind.COMPREHENSIVE_ANALYSIS: self._comprehensive_analysis,
            IntentKind.TRENDING_TOPICS: self._trending_topics,
            IntentKind.CUSTOM_CREATION: self._custom_creation,
            IntentKind.ONE_CLICK_GENERATION: self._one_click_generation,
            IntentKind.KEYWORD_STRATEGY: self._keyword_strategy,
            IntentKind.GENERAL: self._general,
        }

    def respond(self, message: str, records=None) -> str:
        try:
            videos = self.aggregator.normalize(records)
            intent = classify_intent(message)
            reply = self._handlers[intent](videos)
        except Exception:
            logger.exception("Fallback reply failed, using the capability overview")
            return SAFE_REPLY
        return reply or SAFE_REPLY

    # ------------------------------------------------------------------
    # INTENT HANDLERS
    # ------------------------------------------------------------------

    def _comprehensive_analysis(self, videos: List[VideoData]) -> str:
        if not videos:
            return """您好！我注意到您还没有上传视频数据。为了给您提供准确的综合分析，建议您先上传一些视频数据，包括：

📊 **需要的数据：**
- 视频标题和内容
- 播放量、点赞量、评论量、转发量
- 发布平台和时间
- 使用的关键词标签

上传数据后，我将为您提供：
✨ 个人创作风格分析
📈 数据表现洞察
🎯 个性化优化建议
💡 基于您特色的内容策略

请先在"数据分析"页面录入您的视频数据，然后我们开始深度分析！"""

        report = render_stats_report(self.aggregator.aggregate(videos))
        return f"""基于您上传的{len(videos)}个视频数据，我为您提供综合分析：

{report}

**个人风格特征分析：**
{self._personality_analysis(videos)}

**优化建议：**
{self._optimization_suggestions(videos)}

需要我为您生成具体的内容创作方案吗？"""

    def _trending_topics(self, videos: List[VideoData]) -> str:
        if not videos:
            return """🔥 **追踪热点内容策略**

由于您暂未上传视频数据，我为您提供通用的热点追踪模板：

**🌟 当前热门话题：**

**热点1 - 年终大扫除**
• 标题：《年底大扫除攻略！家政阿姨3小时搞定全屋秘籍》
• 脚本要点：工具准备→清洁顺序→效率技巧→成果展示
• 关键词：#年底大扫除 #家政技巧 #高效清洁

**热点2 - 春节家政需求**
• 标题：《春节家政预约爆满！这些服务最受欢迎》
• 脚本要点：需求分析→服务标准→客户反馈→预约建议
• 关键词：#春节家政 #专业服务 #客户好评

**热点3 - 新年职场规划**
• 标题：《家政行业新趋势！月薪过万不是梦》
• 脚本要点：行业分析→技能提升→收入增长→职业规划
• 关键词：#家政行业 #职业规划 #技能提升

💡 **追热点建议：**
- 关注微博、抖音热搜榜
- 结合节假日和季节性话题
- 观察同行爆款内容规律
- 及时跟进突发热点事件

上传您的创作数据后，我将为您生成更个性化的热点内容策略！"""

        keywords = _all_keywords(videos)[:5]
        first = keywords[0] if keywords else "家政"
        second = keywords[1] if len(keywords) > 1 else "家政"
        content_length = self.aggregator.length_preference(videos).content_length
        detailed = content_length > 200
        count = len(videos)

        if detailed:
            framework = f"""
- 开场引入热点（10秒）："最近大家都在讨论..."
- 个人经历分享（30秒）："我在这行{'5年多' if count > 5 else '几年'}，发现..."
- 深度分析讲解（40秒）："其实背后的原因是..."
- 实用建议给出（15秒）："所以我建议大家..."
- 互动引导结尾（5秒）："你们觉得呢？评论区聊聊！\""""
        else:
            framework = """
- 热点切入（5秒）："最近很火的话题..."
- 快速分析（20秒）："其实关键在于..."
- 给出建议（15秒）："建议这样做..."
- 互动结尾（5秒）："同意的点赞！\""""

        return f"""🔥 **基于您的创作风格，为您定制追热点方案：**

**📊 您的创作特点分析：**
- 视频数量：{count}个
- 常用关键词：{'、'.join(keywords) or '暂无'}
- 内容风格：{'详细叙述型，适合深度分享' if detailed else '简洁明快型，适合快速传播'}

**🌟 个性化热点方案：**

**热点1 - 结合您的优势领域**
• 标题：《{first}行业爆火！我{'多年经验' if count > 3 else '亲身经历'}告诉你真相》
• 角度：基于您的实际经验，分享行业内幕和技巧
• 预期效果：利用您的专业背景，增强内容可信度

**热点2 - 季节性话题结合**
• 标题：《年底{second}需求暴增！这样做客户抢着要》
• 角度：结合时令特点，展示专业服务价值
• 预期效果：抓住季节性需求，提升曝光和询单

**热点3 - 对比式热点**
• 标题：《同样做{first}，为什么她月入过万我却不行？》
• 角度：通过对比引发思考，分享成功经验
• 预期效果：引发共鸣和讨论，提升互动率

**📝 完整脚本框架（符合您{content_length}字习惯）：**
{framework}

🎯 **发布策略：**
- 最佳发布时间：根据您历史数据分析，建议晚上7-9点
- 平台选择：优先选择您表现最好的平台
- 标签使用：#热点话题 + #{first} + #专业分享

这套方案完全基于您的创作特点和历史表现数据定制！"""

    def _custom_creation(self, videos: List[VideoData]) -> str:
        report = render_stats_report(self.aggregator.aggregate(videos))
        return f"""我来为您提供定制创作服务！请告诉我：

🎯 **您的具体需求：**
1. 想要创作什么类型的内容？（如：家政技巧、客户案例、服务流程等）
2. 有特定的关键词或主题吗？
3. 目标用户是谁？（如：年轻妈妈、职场女性、老人家庭等）
4. 希望在哪个平台发布？

📊 **基于您的数据分析：**
{report}

请详细描述您的需求，我将结合您的个人风格和历史数据，为您量身定制内容方案！"""

    def _one_click_generation(self, videos: List[VideoData]) -> str:
        if not videos:
            return f"""为了给您生成更精准的内容，建议您先上传一些视频数据。不过，我可以为您提供家政行业的通用爆款模板：

🔥 **通用爆款标题模板：**
1. 《家政阿姨的秘密！这3个技巧让客户抢着要》
2. 《月薪过万的家政员都在用这个方法！》
3. 《客户满意度100%！家政服务这样做就对了》

📝 **内容脚本框架：**
- 开场抓眼球（3秒黄金法则）
- 痛点共鸣（客户的困扰）
- 解决方案展示（专业技能）
- 效果证明（前后对比）
- 行动号召（联系方式）

🏷️ **通用关键词：**
{GENERIC_KEYWORDS}

上传您的视频数据后，我将为您生成更个性化的内容！"""

        return self._content_from_data(videos)

    def _keyword_strategy(self, videos: List[VideoData]) -> str:
        if not videos:
            current = "暂无数据"
            recommended = GENERIC_KEYWORDS
            suggestions = "建议先上传视频数据，我将为您提供个性化关键词策略"
        else:
            top = [k.keyword for k in self.aggregator.top_keywords(videos)]
            current = "、".join(top) or "暂无关键词数据"
            recommended = "家政技巧、客户案例、服务流程、专业培训、行业经验、清洁妙招"
            suggestions = f"""
• 主关键词：在标题开头使用，如"{top[0] if top else '家政服务'}"
• 长尾关键词：结合地区和服务类型，如"北京专业月嫂"
• 热门标签：关注平台热门话题，及时跟进
• 关键词密度：标题、描述、标签中合理分布，避免堆砌"""

        return f"""基于您的{len(videos)}个视频数据，为您推荐关键词策略：

🎯 **您常用的关键词：**
{current}

🔥 **推荐新关键词：**
{recommended}

💡 **关键词使用建议：**
{suggestions}"""

    def _general(self, videos: List[VideoData]) -> str:
        report = render_stats_report(self.aggregator.aggregate(videos))
        return f"""您好！我是您的AI家政运营助手，我已经分析了您的数据。

{report}

{CAPABILITIES}"""

    # ------------------------------------------------------------------
    # HELPERS
    # ------------------------------------------------------------------

    def _personality_analysis(self, videos: List[VideoData]) -> str:
        titles = [v.title for v in videos if v.title]
        keywords = _all_keywords(videos)

        platform_pref = f"您主要在{platform_name(videos[0].platform)}等平台创作"

        if any("！" in t or "？" in t for t in titles):
            title_style = "标题风格偏向活泼，善用感叹号和疑问句"
        else:
            title_style = "标题风格相对平稳"

        themes = f"主要关注{'、'.join(keywords[:3])}等主题" if keywords else "内容主题较为多样"
        frequency = "较高，持续更新" if len(videos) > 10 else "适中，稳定输出"

        return f"""
• **平台偏好**: {platform_pref}
• **标题风格**: {title_style}
• **内容主题**: {themes}
• **创作频率**: {frequency}
• **互动特点**: 根据数据表现，您的内容具有一定的用户吸引力"""

    def _optimization_suggestions(self, videos: List[VideoData]) -> str:
        stats = self.aggregator.aggregate(videos)
        avg_views = stats.total_views / stats.video_count if stats.video_count else 0

        suggestions = []
        if avg_views < 1000:
            suggestions.append("• **提升曝光**: 优化发布时间，建议在用户活跃时段发布")
        if stats.like_rate < 5:
            suggestions.append("• **增加互动**: 在内容中加入提问或话题讨论，提升用户参与度")
        suggestions.append("• **内容优化**: 基于您的风格，建议增加更多实用技巧分享")
        suggestions.append("• **关键词策略**: 结合热门话题，优化标题和标签")

        return "\n".join(suggestions)

    def _script(self, count: int, content_length: int) -> str:
        if content_length > 200:
            return f"""
**开场(0-10秒)**: "哈喽姐妹们！我是做家政{'5年多了' if count > 5 else '也有2年多了'}，今天必须跟大家分享一个超实用的技巧！你们知道吗？很多客户其实最看重的不是你打扫得多干净..."

**痛点展示(10-25秒)**: "前两天我遇到个客户，她跟我说之前请的阿姨啊，表面上看起来挺干净的，但是！（停顿，表情严肃）细节地方根本不到位！比如说这个门缝、窗台角落、还有厨房的油烟机滤网，这些地方不处理，再干净也白搭！"

**解决方案详解(25-60秒)**: "所以我今天就教大家我的独门秘籍！第一步，准备工具很关键，我用的是这几样（展示工具）；第二步，清洁顺序很重要，一定要从上到下，从里到外；第三步，这个是重点！（凑近镜头）我会用这个小技巧处理死角..."

**效果对比(60-80秒)**: "你们看看这个前后对比！（展示清洁前后照片）客户当场就说，哎呀这个阿姨真的不一样！现在这个客户啊，每个月都指定要我去，而且还给我涨了工资！"

**互动引导(80-100秒)**: "姐妹们，这样的小技巧我还有很多，如果你们想学的话，记得点赞关注，评论区告诉我你们最想学哪方面的技巧，人多的话我就专门做一期详细教学！我们一起把家政这行做得更专业！\""""

        return f"""
**开场(0-5秒)**: "姐妹们！今天分享个家政小技巧！"

**痛点(5-15秒)**: "很多人觉得家政就是简单打扫，其实门道可多了！"

**解决方案(15-40秒)**: "我做家政{'几年了' if count > 3 else '也有段时间了'}，发现客户最看重这3点：细节处理、服务态度、专业工具。掌握了这些，工资自然就上去了！"

**效果展示(40-55秒)**: "就像我现在这个客户，每月指定要我，还主动涨工资！"

**结尾(55-60秒)**: "想学更多技巧的，关注我！每天分享实用方法！\""""

    def _content_from_data(self, videos: List[VideoData]) -> str:
        best = self.aggregator.best_record(videos)
        pref = self.aggregator.length_preference(videos)
        keywords = _all_keywords(videos)[:8]
        count = len(videos)

        return f"""基于您的{count}个视频数据，为您生成个性化内容：

🔥 **爆款标题方案（符合您{pref.title_length}字习惯）：**

**方案1**: 《{best.title or '月嫂涨薪秘籍'}！客户抢着要的3个技巧💰》（{pref.title_length}字）
**方案2**: 《做家政{'5年总结' if count > 5 else '2年经验'}：这样服务客户主动加价！》（{pref.title_length}字）
**方案3**: 《家政阿姨必看！月薪过万的都在用这个方法🔥》（{pref.title_length}字）

📝 **完整内容脚本（符合您{pref.content_length}字以上习惯）：**
{self._script(count, pref.content_length)}

🏷️ **精准关键词（基于您的数据）：**
{'、'.join(keywords) or '家政服务、专业保洁、客户满意、月嫂技巧、服务升级'}

💡 **创作建议：**
- 根据您的数据分析，您的内容平均{pref.content_length}字，这个长度很适合深度分享经验
- 建议保持现有的详细叙述风格，用户更容易产生信任感
- 可以多加入一些具体的数字和案例，增强说服力

这套方案完全基于您的个人创作习惯和表现最好的内容特点定制！"""


_default_responder = FallbackResponder()


def generate_fallback_response(message: str, records=None) -> str:
    return _default_responder.respond(message, records)
