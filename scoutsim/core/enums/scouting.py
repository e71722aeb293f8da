"""Scout-side enumerations: activities, skills and career focus."""

from enum import Enum


class ActivityType(Enum):
    """Everything a scout can put in a weekly schedule slot."""

    ATTEND_MATCH = "attendMatch"
    WATCH_VIDEO = "watchVideo"
    WRITE_REPORT = "writeReport"
    NETWORK_MEETING = "networkMeeting"
    TRAINING_VISIT = "trainingVisit"
    TRAVEL = "travel"
    STUDY = "study"
    REST = "rest"
    ACADEMY_VISIT = "academyVisit"
    YOUTH_TOURNAMENT = "youthTournament"
    INTERNATIONAL_TRAVEL = "internationalTravel"

    # Youth venues
    SCHOOL_MATCH = "schoolMatch"
    GRASSROOTS_TOURNAMENT = "grassrootsTournament"
    STREET_FOOTBALL = "streetFootball"
    ACADEMY_TRIAL_DAY = "academyTrialDay"
    YOUTH_FESTIVAL = "youthFestival"
    FOLLOW_UP_SESSION = "followUpSession"
    PARENT_COACH_MEETING = "parentCoachMeeting"
    WRITE_PLACEMENT_REPORT = "writePlacementReport"

    # First team
    RESERVE_MATCH = "reserveMatch"
    SCOUTING_MISSION = "scoutingMission"
    OPPOSITION_ANALYSIS = "oppositionAnalysis"
    AGENT_SHOWCASE = "agentShowcase"
    TRIAL_MATCH = "trialMatch"
    CONTRACT_NEGOTIATION = "contractNegotiation"

    # Data
    DATABASE_QUERY = "databaseQuery"
    DEEP_VIDEO_ANALYSIS = "deepVideoAnalysis"
    STATS_BRIEFING = "statsBriefing"
    DATA_CONFERENCE = "dataConference"
    ALGORITHM_CALIBRATION = "algorithmCalibration"
    MARKET_INEFFICIENCY = "marketInefficiency"
    ANALYTICS_TEAM_MEETING = "analyticsTeamMeeting"


class ScoutSkill(Enum):
    TECHNICAL_EYE = "technicalEye"
    PHYSICAL_ASSESSMENT = "physicalAssessment"
    PSYCHOLOGICAL_READ = "psychologicalRead"
    TACTICAL_UNDERSTANDING = "tacticalUnderstanding"
    DATA_LITERACY = "dataLiteracy"
    PLAYER_JUDGMENT = "playerJudgment"
    POTENTIAL_ASSESSMENT = "potentialAssessment"


class ScoutAttribute(Enum):
    MEMORY = "memory"
    ENDURANCE = "endurance"
    INTUITION = "intuition"
    NETWORKING = "networking"
    PERSUASION = "persuasion"
    ADAPTABILITY = "adaptability"


class Specialization(Enum):
    """A scout's primary career focus."""

    YOUTH = "youth"
    FIRST_TEAM = "firstTeam"
    REGIONAL = "regional"
    DATA = "data"


class QualityTier(Enum):
    """Outcome tier of a weekly activity, worst to best."""

    POOR = "poor"
    AVERAGE = "average"
    GOOD = "good"
    EXCELLENT = "excellent"
    EXCEPTIONAL = "exceptional"


class InsightType(Enum):
    """Kinds of cultural insight unlocked by regional knowledge."""

    PLAYING_STYLE = "playingStyle"
    DEVELOPMENT_CULTURE = "developmentCulture"
    MENTALITY_PATTERN = "mentalityPattern"
    PHYSICAL_TRAIT = "physicalTrait"


class MessageType(Enum):
    """Inbox message categories."""

    ASSIGNMENT = "assignment"
    NEWS = "news"
    EVENT = "event"
    FEEDBACK = "feedback"
